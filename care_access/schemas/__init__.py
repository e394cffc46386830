"""Pydantic request/response schemas for the API."""

from care_access.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from care_access.schemas.role import RoleResponse, RoleSummaryResponse
from care_access.schemas.role_permission import (
    PermissionFlagsResponse,
    ResolvedPermissionResponse,
    RolePermissionListResponse,
    RolePermissionResponse,
)

__all__ = [
    "HealthResponse",
    "PermissionFlagsResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "ResolvedPermissionResponse",
    "RoleResponse",
    "RolePermissionListResponse",
    "RolePermissionResponse",
    "RoleSummaryResponse",
]
