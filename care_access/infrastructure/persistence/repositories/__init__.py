"""Persistence repositories. Re-exports for dependency injection."""

from care_access.infrastructure.persistence.repositories.memory_store import (
    InMemoryRolePermissionStore,
    InMemoryRoleRepository,
)
from care_access.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionStore,
)
from care_access.infrastructure.persistence.repositories.role_repo import RoleRepository

__all__ = [
    "InMemoryRolePermissionStore",
    "InMemoryRoleRepository",
    "RolePermissionStore",
    "RoleRepository",
]
