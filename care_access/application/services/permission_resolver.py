"""Resolves effective role permissions (implements IPermissionResolver).

Lookup is a two-candidate decision table: the caller's tenant row first,
then the system row (tenant_id IS NULL). The first hit wins; no hit raises
PermissionNotFoundException so callers can deny by default.
"""

from __future__ import annotations

from care_access.application.interfaces.repositories import IRolePermissionStore
from care_access.domain.entities import RolePermissionEntity
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import PermissionNotFoundException
from care_access.domain.value_objects import PermissionFlags, PermissionKey


def candidate_tenants(tenant_id: str | None) -> list[str | None]:
    """Return tenant ids to try, in precedence order (None is the system row)."""
    if tenant_id:
        return [tenant_id, None]
    return [None]


class PermissionResolver:
    """Resolves (role, resource, operation, tenant) to the effective role_permissions row."""

    def __init__(self, store: IRolePermissionStore) -> None:
        self.store = store

    async def resolve_row(
        self,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
        tenant_id: str | None = None,
    ) -> RolePermissionEntity:
        """Return the tenant row if present, else the system row.

        Raises:
            ValidationException: If role_code/resource_type is empty or permission_type is unknown.
            PermissionNotFoundException: If neither row exists.
            StoreUnavailableException: If the store cannot be read.
        """
        key = PermissionKey.of(role_code, resource_type, permission_type)
        for candidate in candidate_tenants(tenant_id):
            row = await self.store.get_by_key(candidate, key)
            if row is not None:
                return row
        raise PermissionNotFoundException(
            role_code=key.role_code,
            resource_type=key.resource_type,
            permission_type=key.permission_type.value,
            tenant_id=tenant_id or None,
        )

    async def resolve(
        self,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
        tenant_id: str | None = None,
    ) -> PermissionFlags:
        """Return {assigned_only, branch_only} of the effective row."""
        row = await self.resolve_row(role_code, resource_type, permission_type, tenant_id)
        return row.flags
