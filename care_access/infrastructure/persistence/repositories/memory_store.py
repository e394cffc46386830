"""In-memory role-permission and role stores.

Same contracts as the SQL stores, backed by dicts. Used for tests and for
running the API without a database.
"""

from __future__ import annotations

from collections.abc import Iterable

from care_access.application.dtos.role_permission import RolePermissionFilter
from care_access.domain.entities import RoleEntity, RolePermissionEntity
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import ValidationException
from care_access.domain.value_objects import PermissionKey
from care_access.shared.utils.generators import generate_cuid

_StoreKey = tuple[str | None, str, str, PermissionType]


def _sort_key(row: RolePermissionEntity) -> tuple[str, str, str, bool]:
    return (
        row.role_code,
        row.resource_type,
        row.permission_type.value,
        row.tenant_id is None,
    )


class InMemoryRolePermissionStore:
    """Dict-backed IRolePermissionStore. One row per (tenant_id, role, resource, operation)."""

    def __init__(self, rows: Iterable[RolePermissionEntity] = ()) -> None:
        self._rows: dict[_StoreKey, RolePermissionEntity] = {}
        for row in rows:
            self._put(row)

    def _put(self, row: RolePermissionEntity) -> None:
        key = (row.tenant_id, row.role_code, row.resource_type, row.permission_type)
        if key in self._rows:
            raise ValidationException(
                f"Duplicate role permission for tenant={row.tenant_id}, role_code={row.role_code}, "
                f"resource_type={row.resource_type}, permission_type={row.permission_type.value}",
                field="permission_type",
            )
        self._rows[key] = row

    def add(
        self,
        tenant_id: str | None,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
        *,
        assigned_only: bool = False,
        branch_only: bool = False,
        permission_id: str | None = None,
    ) -> RolePermissionEntity:
        """Insert a row; tenant_id None makes it a system row. Returns the stored entity."""
        key = PermissionKey.of(role_code, resource_type, permission_type)
        row = RolePermissionEntity(
            permission_id=permission_id or generate_cuid(),
            tenant_id=tenant_id,
            role_code=key.role_code,
            resource_type=key.resource_type,
            permission_type=key.permission_type,
            assigned_only=assigned_only,
            branch_only=branch_only,
        )
        self._put(row)
        return row

    async def get_by_key(
        self, tenant_id: str | None, key: PermissionKey
    ) -> RolePermissionEntity | None:
        return self._rows.get(
            (tenant_id, key.role_code, key.resource_type, key.permission_type)
        )

    async def get_by_id(self, permission_id: str) -> RolePermissionEntity | None:
        for row in self._rows.values():
            if row.permission_id == permission_id:
                return row
        return None

    async def list_permissions(
        self,
        tenant_id: str | None,
        filters: RolePermissionFilter | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[list[RolePermissionEntity], int]:
        visible = [
            row
            for row in self._rows.values()
            if (row.tenant_id is None or (tenant_id is not None and row.tenant_id == tenant_id))
            and (filters is None or filters.matches(row))
        ]
        visible.sort(key=_sort_key)
        end = None if limit is None else skip + limit
        return visible[skip:end], len(visible)


class InMemoryRoleRepository:
    """Dict-backed IRoleRepository."""

    def __init__(self, roles: Iterable[RoleEntity] = ()) -> None:
        self._roles: dict[str, RoleEntity] = {r.role_code: r for r in roles}

    def add(self, role: RoleEntity) -> RoleEntity:
        self._roles[role.role_code] = role
        return role

    async def list_roles(self, *, active_only: bool = False) -> list[RoleEntity]:
        roles = sorted(self._roles.values(), key=lambda r: r.role_code)
        if active_only:
            roles = [r for r in roles if r.is_active]
        return roles

    async def get_by_code(self, role_code: str) -> RoleEntity | None:
        return self._roles.get(role_code)
