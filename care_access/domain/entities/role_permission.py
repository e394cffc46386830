"""Role and RolePermission domain entities.

Reference data curated by administrators; the access-control engine only
reads them.
"""

from dataclasses import dataclass

from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import ValidationException
from care_access.domain.value_objects.core import PermissionFlags


@dataclass(frozen=True)
class RolePermissionEntity:
    """One row of role_permissions.

    tenant_id None marks a system-wide default that applies to every tenant
    without its own row for the same (role_code, resource_type, permission_type).
    """

    permission_id: str
    tenant_id: str | None
    role_code: str
    resource_type: str
    permission_type: PermissionType
    assigned_only: bool = False
    branch_only: bool = False

    def __post_init__(self) -> None:
        if not self.permission_id:
            raise ValidationException("permission_id is required", field="permission_id")
        if not self.role_code:
            raise ValidationException("role_code is required", field="role_code")
        if not self.resource_type:
            raise ValidationException("resource_type is required", field="resource_type")

    @property
    def is_system(self) -> bool:
        return self.tenant_id is None

    @property
    def flags(self) -> PermissionFlags:
        return PermissionFlags(
            assigned_only=self.assigned_only,
            branch_only=self.branch_only,
        )


@dataclass(frozen=True)
class RoleEntity:
    """Role reference record. Used for reporting, never for access decisions."""

    role_code: str
    description: str
    is_active: bool = True
    is_system: bool = False

    @property
    def display_name(self) -> str:
        """First line of the description (the role's name); falls back to role_code."""
        first = self.description.split("\n", 1)[0].strip() if self.description else ""
        return first or self.role_code

    @property
    def detail(self) -> str:
        """Description text after the first line."""
        parts = self.description.split("\n", 1) if self.description else []
        return parts[1].strip() if len(parts) > 1 else ""
