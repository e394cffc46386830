"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
The SQL store and the in-memory store both satisfy IRolePermissionStore.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from care_access.application.dtos.role_permission import RolePermissionFilter
    from care_access.domain.entities import RoleEntity, RolePermissionEntity
    from care_access.domain.value_objects import PermissionKey


# Permission store interface
class IRolePermissionStore(Protocol):
    """Protocol for read access to role_permissions (DIP).

    Implementations raise StoreUnavailableException on transport failures.
    """

    async def get_by_key(
        self, tenant_id: str | None, key: PermissionKey
    ) -> RolePermissionEntity | None:
        """Return the row for exactly this tenant (None = system row only), or None."""

    async def get_by_id(self, permission_id: str) -> RolePermissionEntity | None:
        """Return a row by permission_id, or None."""

    async def list_permissions(
        self,
        tenant_id: str | None,
        filters: RolePermissionFilter | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[list[RolePermissionEntity], int]:
        """Return (page, total) of the tenant's rows plus system rows (system only when tenant is None).

        Ordered by role_code, resource_type, permission_type, then tenant rows before system rows.
        """


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for role reference data (reporting only)."""

    async def list_roles(self, *, active_only: bool = False) -> list[RoleEntity]:
        """Return roles ordered by role_code."""

    async def get_by_code(self, role_code: str) -> RoleEntity | None:
        """Return a role by code, or None."""
