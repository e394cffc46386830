"""Application DTOs (read-models and request objects; no ORM)."""

from care_access.application.dtos.access import UserAccessContext
from care_access.application.dtos.role_permission import (
    ResolvedPermission,
    RolePermissionFilter,
    RolePermissionPage,
    RoleSummary,
)

__all__ = [
    "ResolvedPermission",
    "RolePermissionFilter",
    "RolePermissionPage",
    "RoleSummary",
    "UserAccessContext",
]
