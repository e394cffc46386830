"""Domain entities.

Pure domain models; no ORM or persistence concerns.
"""

from care_access.domain.entities.role_permission import RoleEntity, RolePermissionEntity

__all__ = [
    "RoleEntity",
    "RolePermissionEntity",
]
