"""Role repository (SQL). Read methods return RoleEntity."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from care_access.domain.entities import RoleEntity
from care_access.domain.exceptions import StoreUnavailableException
from care_access.infrastructure.persistence.models.role import Role
from care_access.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def _role_to_entity(r: Role) -> RoleEntity:
    """Map ORM Role to domain RoleEntity."""
    return RoleEntity(
        role_code=r.role_code,
        description=r.description or "",
        is_active=bool(r.is_active),
        is_system=bool(r.is_system),
    )


class RoleRepository:
    """Role reference data. Used for reporting only."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_roles(self, *, active_only: bool = False) -> list[RoleEntity]:
        stmt = select(Role).order_by(Role.role_code)
        if active_only:
            stmt = stmt.where(Role.is_active.is_(True))
        try:
            result = await self.db.execute(stmt)
        except (OperationalError, InterfaceError) as e:
            logger.error("roles query failed: %s", e)
            raise StoreUnavailableException(str(e.orig or e)) from e
        return [_role_to_entity(r) for r in result.scalars().all()]

    async def get_by_code(self, role_code: str) -> RoleEntity | None:
        try:
            result = await self.db.execute(select(Role).where(Role.role_code == role_code))
        except (OperationalError, InterfaceError) as e:
            logger.error("roles query failed: %s", e)
            raise StoreUnavailableException(str(e.orig or e)) from e
        r = result.scalar_one_or_none()
        return _role_to_entity(r) if r else None
