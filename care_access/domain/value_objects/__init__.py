"""Domain value objects and shared value types."""

from care_access.domain.value_objects.core import (
    PermissionFlags,
    PermissionKey,
    validate_table_alias,
)

__all__ = [
    "PermissionFlags",
    "PermissionKey",
    "validate_table_alias",
]
