"""Role-permissions API: list, resolve, cached flags, get (read-only).

Tenant comes from the optional tenant header; without it only system rows
(tenant_id NULL) are visible.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from care_access.api.v1.dependencies import (
    get_authorization_service,
    get_optional_tenant_id,
    get_permission_resolver,
    get_role_permission_service,
)
from care_access.application.dtos import ResolvedPermission, RolePermissionFilter
from care_access.application.services import (
    AuthorizationService,
    PermissionResolver,
    RolePermissionService,
)
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import ValidationException
from care_access.schemas.role_permission import (
    PermissionFlagsResponse,
    ResolvedPermissionResponse,
    RolePermissionListResponse,
    RolePermissionResponse,
)

router = APIRouter()


def _parse_permission_type(value: str | None) -> PermissionType | None:
    if value is None:
        return None
    try:
        return PermissionType.parse(value)
    except ValueError as e:
        raise ValidationException(str(e), field="permission_type") from None


@router.get("", response_model=RolePermissionListResponse)
async def list_role_permissions(
    tenant_id: Annotated[str | None, Depends(get_optional_tenant_id)],
    service: Annotated[RolePermissionService, Depends(get_role_permission_service)],
    role_code: str | None = None,
    resource_type: str | None = None,
    permission_type: str | None = None,
    assigned_only: bool | None = None,
    branch_only: bool | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """List the tenant's rows plus system rows (filtered, paginated)."""
    filters = RolePermissionFilter(
        role_code=role_code or None,
        resource_type=resource_type or None,
        permission_type=_parse_permission_type(permission_type or None),
        assigned_only=assigned_only,
        branch_only=branch_only,
    )
    page = await service.list_permissions(tenant_id, filters, skip=skip, limit=limit)
    return RolePermissionListResponse(
        items=[RolePermissionResponse.model_validate(row) for row in page.items],
        total=page.total,
        skip=skip,
        limit=limit,
    )


@router.get("/resolve", response_model=ResolvedPermissionResponse)
async def resolve_role_permission(
    role_code: str,
    resource_type: str,
    permission_type: str,
    tenant_id: Annotated[str | None, Depends(get_optional_tenant_id)],
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
):
    """Return the effective flags: tenant row if present, else system row. 404 when neither exists."""
    row = await resolver.resolve_row(role_code, resource_type, permission_type, tenant_id)
    resolved = ResolvedPermission.from_entity(row)
    return ResolvedPermissionResponse(
        permission_id=resolved.permission_id,
        tenant_id=resolved.tenant_id,
        role_code=resolved.role_code,
        resource_type=resolved.resource_type,
        permission_type=resolved.permission_type,
        flags=PermissionFlagsResponse(**resolved.flags.to_dict()),
        source=resolved.source,
    )


@router.get("/flags", response_model=PermissionFlagsResponse)
async def get_effective_flags(
    role_code: str,
    resource_type: str,
    permission_type: str,
    tenant_id: Annotated[str | None, Depends(get_optional_tenant_id)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Return only the effective flags, served from the permission cache when enabled."""
    flags = await authz.get_flags(role_code, resource_type, permission_type, tenant_id)
    return PermissionFlagsResponse(**flags.to_dict())


@router.get("/{permission_id}", response_model=RolePermissionResponse)
async def get_role_permission(
    permission_id: str,
    tenant_id: Annotated[str | None, Depends(get_optional_tenant_id)],
    service: Annotated[RolePermissionService, Depends(get_role_permission_service)],
):
    """Get a role permission by id; rows of other tenants are reported as not found."""
    row = await service.get_permission(permission_id, tenant_id)
    return RolePermissionResponse.model_validate(row)
