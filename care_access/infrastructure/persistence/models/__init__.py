"""Persistence models: ORM entities."""

from care_access.infrastructure.persistence.models.role import Role
from care_access.infrastructure.persistence.models.role_permission import RolePermission

__all__ = [
    "Role",
    "RolePermission",
]
