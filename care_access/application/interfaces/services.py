"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from care_access.domain.entities import RolePermissionEntity
    from care_access.domain.enums import PermissionType
    from care_access.domain.value_objects import PermissionFlags


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving effective scoping flags under tenant fallback rules."""

    async def resolve(
        self,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
        tenant_id: str | None = None,
    ) -> PermissionFlags:
        """Return flags of the tenant row, else the system row; raise PermissionNotFoundException."""

    async def resolve_row(
        self,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
        tenant_id: str | None = None,
    ) -> RolePermissionEntity:
        """Same lookup as resolve() but return the effective row."""


# Cache service interface
class ICacheService(Protocol):
    """Protocol for cache backends (e.g. Redis). All values are JSON-serializable."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> bool:
        """Remove key from cache."""

    async def delete_pattern(self, pattern: str) -> int:
        """Remove all keys matching a glob pattern; return count."""
