"""DTOs for role-permission read use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from typing import Literal

from care_access.domain.entities import RolePermissionEntity
from care_access.domain.enums import PermissionType
from care_access.domain.value_objects import PermissionFlags


@dataclass(frozen=True)
class RolePermissionFilter:
    """Optional filters for listing role permissions; None means 'any'."""

    role_code: str | None = None
    resource_type: str | None = None
    permission_type: PermissionType | None = None
    assigned_only: bool | None = None
    branch_only: bool | None = None

    def matches(self, row: RolePermissionEntity) -> bool:
        """Return True if row satisfies every set filter."""
        if self.role_code is not None and row.role_code != self.role_code:
            return False
        if self.resource_type is not None and row.resource_type != self.resource_type:
            return False
        if self.permission_type is not None and row.permission_type != self.permission_type:
            return False
        if self.assigned_only is not None and row.assigned_only != self.assigned_only:
            return False
        if self.branch_only is not None and row.branch_only != self.branch_only:
            return False
        return True


@dataclass(frozen=True)
class RolePermissionPage:
    """One page of role permissions plus the unpaginated total."""

    items: list[RolePermissionEntity]
    total: int


@dataclass(frozen=True)
class ResolvedPermission:
    """Effective permission row and whether it came from the tenant or the system defaults."""

    permission_id: str
    tenant_id: str | None
    role_code: str
    resource_type: str
    permission_type: PermissionType
    flags: PermissionFlags
    source: Literal["tenant", "system"]

    @classmethod
    def from_entity(cls, row: RolePermissionEntity) -> "ResolvedPermission":
        return cls(
            permission_id=row.permission_id,
            tenant_id=row.tenant_id,
            role_code=row.role_code,
            resource_type=row.resource_type,
            permission_type=row.permission_type,
            flags=row.flags,
            source="system" if row.is_system else "tenant",
        )


@dataclass(frozen=True)
class RoleSummary:
    """Role with its effective permissions grouped by resource type.

    permissions maps resource_type -> {permission letter -> flags}.
    """

    role_code: str
    name: str
    is_active: bool
    permissions: dict[str, dict[str, PermissionFlags]] = field(default_factory=dict)
