"""Application interfaces (ports): repository and service protocols."""

from care_access.application.interfaces.repositories import (
    IRolePermissionStore,
    IRoleRepository,
)
from care_access.application.interfaces.services import (
    ICacheService,
    IPermissionResolver,
)

__all__ = [
    "ICacheService",
    "IPermissionResolver",
    "IRolePermissionStore",
    "IRoleRepository",
]
