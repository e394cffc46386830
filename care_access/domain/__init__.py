"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from care_access.domain.entities import RoleEntity, RolePermissionEntity
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import (
    AuthorizationException,
    CareAccessException,
    PermissionNotFoundException,
    ResourceNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from care_access.domain.value_objects import PermissionFlags, PermissionKey

__all__ = [
    # Entities
    "RoleEntity",
    "RolePermissionEntity",
    # Enums
    "PermissionType",
    # Exceptions
    "AuthorizationException",
    "CareAccessException",
    "PermissionNotFoundException",
    "ResourceNotFoundException",
    "StoreUnavailableException",
    "ValidationException",
    # Value objects
    "PermissionFlags",
    "PermissionKey",
]
