"""Role-permission API schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from care_access.domain.enums import PermissionType


class RolePermissionResponse(BaseModel):
    """Role-permission list/detail response. tenant_id null marks a system row."""

    model_config = ConfigDict(from_attributes=True)

    permission_id: str
    tenant_id: str | None
    role_code: str
    resource_type: str
    permission_type: PermissionType
    assigned_only: bool
    branch_only: bool


class RolePermissionListResponse(BaseModel):
    """Paginated role-permission list."""

    items: list[RolePermissionResponse]
    total: int = Field(..., ge=0)
    skip: int = Field(..., ge=0)
    limit: int = Field(..., ge=1)


class PermissionFlagsResponse(BaseModel):
    """Scoping flags for one role/resource/operation."""

    model_config = ConfigDict(from_attributes=True)

    assigned_only: bool
    branch_only: bool


class ResolvedPermissionResponse(BaseModel):
    """Effective permission after tenant-then-system resolution."""

    model_config = ConfigDict(from_attributes=True)

    permission_id: str
    tenant_id: str | None
    role_code: str
    resource_type: str
    permission_type: PermissionType
    flags: PermissionFlagsResponse
    source: Literal["tenant", "system"]
