"""Roles API: list roles and their effective permissions (read-only)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from care_access.api.v1.dependencies import (
    get_optional_tenant_id,
    get_role_permission_service,
    get_role_repo,
)
from care_access.application.interfaces.repositories import IRoleRepository
from care_access.application.services import RolePermissionService
from care_access.schemas.role import RoleResponse, RoleSummaryResponse
from care_access.schemas.role_permission import PermissionFlagsResponse

router = APIRouter()


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    role_repo: Annotated[IRoleRepository, Depends(get_role_repo)],
    active_only: bool = False,
):
    """List roles ordered by code."""
    roles = await role_repo.list_roles(active_only=active_only)
    return [
        RoleResponse(
            role_code=r.role_code,
            name=r.display_name,
            description=r.detail,
            is_active=r.is_active,
            is_system=r.is_system,
        )
        for r in roles
    ]


@router.get("/summary", response_model=list[RoleSummaryResponse])
async def list_role_summaries(
    tenant_id: Annotated[str | None, Depends(get_optional_tenant_id)],
    service: Annotated[RolePermissionService, Depends(get_role_permission_service)],
    active_only: bool = False,
):
    """Each role with its effective permissions as seen from the caller's tenant."""
    summaries = await service.role_summaries(tenant_id, active_only=active_only)
    return [
        RoleSummaryResponse(
            role_code=s.role_code,
            name=s.name,
            is_active=s.is_active,
            permissions={
                resource: {
                    op: PermissionFlagsResponse(**flags.to_dict())
                    for op, flags in ops.items()
                }
                for resource, ops in s.permissions.items()
            },
        )
        for s in summaries
    ]
