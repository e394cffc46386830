"""Role-permission reporting: filtered listing, lookup by id, effective role summaries."""

from __future__ import annotations

from care_access.application.dtos.role_permission import (
    RolePermissionFilter,
    RolePermissionPage,
    RoleSummary,
)
from care_access.application.interfaces.repositories import (
    IRolePermissionStore,
    IRoleRepository,
)
from care_access.domain.entities import RolePermissionEntity
from care_access.domain.exceptions import ResourceNotFoundException, ValidationException
from care_access.domain.value_objects import PermissionFlags

MAX_PAGE_SIZE = 500


def effective_rows(rows: list[RolePermissionEntity]) -> list[RolePermissionEntity]:
    """Collapse rows to one per (role, resource, operation); tenant rows win over system rows."""
    chosen: dict[tuple[str, str, str], RolePermissionEntity] = {}
    for row in rows:
        key = (row.role_code, row.resource_type, row.permission_type.value)
        current = chosen.get(key)
        if current is None or (current.is_system and not row.is_system):
            chosen[key] = row
    return list(chosen.values())


class RolePermissionService:
    """Read-only queries over role permissions and roles."""

    def __init__(
        self,
        store: IRolePermissionStore,
        role_repo: IRoleRepository | None = None,
    ) -> None:
        self._store = store
        self._roles = role_repo

    async def list_permissions(
        self,
        tenant_id: str | None,
        filters: RolePermissionFilter | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> RolePermissionPage:
        """Return a page of the tenant's rows plus system rows."""
        if skip < 0:
            raise ValidationException("skip must be >= 0", field="skip")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        items, total = await self._store.list_permissions(
            tenant_id, filters, skip=skip, limit=limit
        )
        return RolePermissionPage(items=items, total=total)

    async def get_permission(
        self, permission_id: str, tenant_id: str | None = None
    ) -> RolePermissionEntity:
        """Return the row if visible from tenant_id (its own rows and system rows)."""
        row = await self._store.get_by_id(permission_id)
        if row is None or not (row.is_system or row.tenant_id == tenant_id):
            raise ResourceNotFoundException("role_permission", permission_id)
        return row

    async def role_summaries(
        self, tenant_id: str | None, *, active_only: bool = False
    ) -> list[RoleSummary]:
        """Return each role with its effective permissions as seen from tenant_id.

        Roles that have permission rows but no roles entry are reported with
        their code as name and is_active True.
        """
        rows, _ = await self._store.list_permissions(tenant_id, None)
        by_role: dict[str, dict[str, dict[str, PermissionFlags]]] = {}
        for row in effective_rows(rows):
            resources = by_role.setdefault(row.role_code, {})
            resources.setdefault(row.resource_type, {})[row.permission_type.value] = row.flags

        roles = await self._roles.list_roles(active_only=active_only) if self._roles else []
        summaries: list[RoleSummary] = []
        seen: set[str] = set()
        for role in roles:
            seen.add(role.role_code)
            summaries.append(
                RoleSummary(
                    role_code=role.role_code,
                    name=role.display_name,
                    is_active=role.is_active,
                    permissions=by_role.get(role.role_code, {}),
                )
            )
        if not active_only:
            for role_code in sorted(set(by_role) - seen):
                summaries.append(
                    RoleSummary(
                        role_code=role_code,
                        name=role_code,
                        is_active=True,
                        permissions=by_role[role_code],
                    )
                )
        return summaries
