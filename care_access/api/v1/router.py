"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from care_access.api.v1.dependencies.
"""

from fastapi import APIRouter

from care_access.api.v1.endpoints import health, role_permissions, roles

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    role_permissions.router, prefix="/role-permissions", tags=["role-permissions"]
)
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
