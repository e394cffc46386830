"""Cache: Redis service and cache key utilities.

Used by the authorization service to memoize resolved role permissions.
Key format lives in keys.py (DRY).
"""

from care_access.infrastructure.cache.keys import (
    role_permission_all_pattern,
    role_permission_any_tenant_pattern,
    role_permission_key,
    role_permission_tenant_pattern,
)
from care_access.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "role_permission_all_pattern",
    "role_permission_any_tenant_pattern",
    "role_permission_key",
    "role_permission_tenant_pattern",
]
