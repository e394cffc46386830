"""Role API schemas."""

from pydantic import BaseModel, ConfigDict

from care_access.schemas.role_permission import PermissionFlagsResponse


class RoleResponse(BaseModel):
    """Role list response. name is the first line of the description."""

    model_config = ConfigDict(from_attributes=True)

    role_code: str
    name: str
    description: str
    is_active: bool
    is_system: bool


class RoleSummaryResponse(BaseModel):
    """Role with effective permissions: resource_type -> operation letter -> flags."""

    model_config = ConfigDict(from_attributes=True)

    role_code: str
    name: str
    is_active: bool
    permissions: dict[str, dict[str, PermissionFlagsResponse]]
