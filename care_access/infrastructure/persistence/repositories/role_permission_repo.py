"""RolePermission store (SQL): read-only access to role_permissions. Returns domain entities."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from care_access.application.dtos.role_permission import RolePermissionFilter
from care_access.domain.entities import RolePermissionEntity
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import StoreUnavailableException
from care_access.domain.value_objects import PermissionKey
from care_access.infrastructure.persistence.models.role_permission import RolePermission
from care_access.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _role_permission_to_entity(rp: RolePermission) -> RolePermissionEntity:
    """Map ORM RolePermission to domain RolePermissionEntity."""
    return RolePermissionEntity(
        permission_id=rp.permission_id,
        tenant_id=rp.tenant_id,
        role_code=rp.role_code,
        resource_type=rp.resource_type,
        permission_type=PermissionType(rp.permission_type),
        assigned_only=bool(rp.assigned_only),
        branch_only=bool(rp.branch_only),
    )


def _apply_filters(
    stmt: Select[Any], filters: RolePermissionFilter | None
) -> Select[Any]:
    if filters is None:
        return stmt
    if filters.role_code is not None:
        stmt = stmt.where(RolePermission.role_code == filters.role_code)
    if filters.resource_type is not None:
        stmt = stmt.where(RolePermission.resource_type == filters.resource_type)
    if filters.permission_type is not None:
        stmt = stmt.where(RolePermission.permission_type == filters.permission_type.value)
    if filters.assigned_only is not None:
        stmt = stmt.where(RolePermission.assigned_only.is_(filters.assigned_only))
    if filters.branch_only is not None:
        stmt = stmt.where(RolePermission.branch_only.is_(filters.branch_only))
    return stmt


class RolePermissionStore:
    """SQL implementation of IRolePermissionStore.

    Driver connectivity errors surface as StoreUnavailableException so the
    caller can tell "store down" apart from "no row configured".
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self.db.execute(stmt)
        except (OperationalError, InterfaceError) as e:
            logger.error("role_permissions query failed: %s", e)
            raise StoreUnavailableException(str(e.orig or e)) from e

    async def get_by_key(
        self, tenant_id: str | None, key: PermissionKey
    ) -> RolePermissionEntity | None:
        """Return the row for exactly this tenant (None = system row), or None."""
        tenant_clause = (
            RolePermission.tenant_id.is_(None)
            if tenant_id is None
            else RolePermission.tenant_id == tenant_id
        )
        result = await self._execute(
            select(RolePermission)
            .where(
                tenant_clause,
                RolePermission.role_code == key.role_code,
                RolePermission.resource_type == key.resource_type,
                RolePermission.permission_type == key.permission_type.value,
            )
            .limit(1)
        )
        rp = result.scalar_one_or_none()
        return _role_permission_to_entity(rp) if rp else None

    async def get_by_id(self, permission_id: str) -> RolePermissionEntity | None:
        result = await self._execute(
            select(RolePermission).where(RolePermission.permission_id == permission_id)
        )
        rp = result.scalar_one_or_none()
        return _role_permission_to_entity(rp) if rp else None

    async def list_permissions(
        self,
        tenant_id: str | None,
        filters: RolePermissionFilter | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[list[RolePermissionEntity], int]:
        """Return (page, total) of the tenant's rows plus system rows."""
        visible = (
            RolePermission.tenant_id.is_(None)
            if tenant_id is None
            else or_(
                RolePermission.tenant_id == tenant_id,
                RolePermission.tenant_id.is_(None),
            )
        )
        base = _apply_filters(select(RolePermission).where(visible), filters)

        count_result = await self._execute(
            select(func.count()).select_from(base.subquery())
        )
        total = int(count_result.scalar_one())

        stmt = base.order_by(
            RolePermission.role_code,
            RolePermission.resource_type,
            RolePermission.permission_type,
            RolePermission.tenant_id.is_(None),
        ).offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._execute(stmt)
        return [_role_permission_to_entity(rp) for rp in result.scalars().all()], total

    async def list_all_tenants(
        self, filters: RolePermissionFilter | None = None
    ) -> list[RolePermissionEntity]:
        """Return rows of every tenant plus system rows (operational tooling only)."""
        stmt = _apply_filters(select(RolePermission), filters).order_by(
            RolePermission.role_code,
            RolePermission.resource_type,
            RolePermission.permission_type,
            RolePermission.tenant_id.is_(None),
            RolePermission.tenant_id,
        )
        result = await self._execute(stmt)
        return [_role_permission_to_entity(rp) for rp in result.scalars().all()]
