"""Core constants: cache key prefixes and shared literal values."""

# System tenant of the care platform; operational tools resolve against it by default.
SYSTEM_TENANT_ID = "00000000-0000-0000-0000-000000000001"

# Stored branch_tag value meaning "explicitly no branch".
NO_BRANCH_SENTINEL = "-"

# Column holding the branch label on branch-scoped tables.
BRANCH_TAG_COLUMN = "branch_tag"

# Cache key prefixes
CACHE_PREFIX_ROLE_PERMISSION = "role_permission"

# Key segment for system-context lookups (no tenant). Tenant segments always
# carry CACHE_TENANT_SEGMENT_PREFIX, so no tenant id can produce this segment.
CACHE_SYSTEM_SEGMENT = "system"
CACHE_TENANT_SEGMENT_PREFIX = "t="

# Delimiter for composite keys
CACHE_KEY_SEP = ":"
