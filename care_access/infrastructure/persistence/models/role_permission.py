"""RolePermission ORM model (RBAC reference data). Table: role_permissions."""

from sqlalchemy import Boolean, CheckConstraint, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from care_access.domain.enums import PermissionType
from care_access.infrastructure.persistence.database import Base
from care_access.shared.utils.generators import generate_cuid

_PERMISSION_TYPES = ", ".join(f"'{v}'" for v in PermissionType.values())


class RolePermission(Base):
    """Per-tenant or system-wide (tenant_id NULL) scoping flags for role x resource x operation.

    Uniqueness of (tenant_id, role_code, resource_type, permission_type) is
    enforced by two partial indexes because NULL tenant ids never collide in
    a plain unique constraint.
    """

    __tablename__ = "role_permissions"

    permission_id: Mapped[str] = mapped_column(
        String, primary_key=True, default=generate_cuid
    )
    tenant_id: Mapped[str | None] = mapped_column(String, nullable=True)
    role_code: Mapped[str] = mapped_column(String, nullable=False)
    resource_type: Mapped[str] = mapped_column(String, nullable=False)
    permission_type: Mapped[str] = mapped_column(String(1), nullable=False)
    assigned_only: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    branch_only: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    __table_args__ = (
        CheckConstraint(
            f"permission_type IN ({_PERMISSION_TYPES})",
            name="ck_role_permissions_permission_type",
        ),
        Index(
            "uq_role_permissions_tenant_key",
            "tenant_id",
            "role_code",
            "resource_type",
            "permission_type",
            unique=True,
            postgresql_where=text("tenant_id IS NOT NULL"),
            sqlite_where=text("tenant_id IS NOT NULL"),
        ),
        Index(
            "uq_role_permissions_system_key",
            "role_code",
            "resource_type",
            "permission_type",
            unique=True,
            postgresql_where=text("tenant_id IS NULL"),
            sqlite_where=text("tenant_id IS NULL"),
        ),
    )
