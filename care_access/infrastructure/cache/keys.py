"""Cache key builders. Single place for key format (DRY).

Key components (tenant_id, role_code, resource_type) must not contain
CACHE_KEY_SEP or glob characters, to avoid ambiguous or colliding keys and
over-matching invalidation patterns.

Tenant lookups use the segment "t=<tenant_id>"; system-context lookups use
CACHE_SYSTEM_SEGMENT, which never starts with that prefix.
"""

from care_access.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_ROLE_PERMISSION,
    CACHE_SYSTEM_SEGMENT,
    CACHE_TENANT_SEGMENT_PREFIX,
)
from care_access.domain.exceptions import ValidationException

_GLOB_CHARS = frozenset("*?[]")


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValidationException if value contains the separator or a glob character.

    Args:
        value: String component used in a cache key.
        name: Name of the component (reported as the failing field).

    Raises:
        ValidationException: If value contains CACHE_KEY_SEP or one of * ? [ ].
    """
    if CACHE_KEY_SEP in value:
        raise ValidationException(
            f"{name} must not contain {CACHE_KEY_SEP!r}",
            field=name,
        )
    if _GLOB_CHARS.intersection(value):
        raise ValidationException(f"{name} must not contain any of * ? [ ]", field=name)


def _validate_key_components(components: list[tuple[str, str]]) -> None:
    """Validate multiple key components; raise on first invalid one."""
    for value, name in components:
        _validate_key_component(value, name)


def _tenant_segment(tenant_id: str | None) -> str:
    if not tenant_id:
        return CACHE_SYSTEM_SEGMENT
    _validate_key_component(tenant_id, "tenant_id")
    return f"{CACHE_TENANT_SEGMENT_PREFIX}{tenant_id}"


def role_permission_key(
    tenant_id: str | None, role_code: str, resource_type: str, permission_type: str
) -> str:
    """Cache key for the effective flags of one lookup as seen from tenant_id."""
    _validate_key_components(
        [
            (role_code, "role_code"),
            (resource_type, "resource_type"),
            (permission_type, "permission_type"),
        ]
    )
    return CACHE_KEY_SEP.join(
        [
            CACHE_PREFIX_ROLE_PERMISSION,
            _tenant_segment(tenant_id),
            role_code,
            resource_type,
            permission_type,
        ]
    )


def role_permission_tenant_pattern(tenant_id: str | None) -> str:
    """Pattern matching every cached lookup made from tenant_id (system context when None)."""
    return CACHE_KEY_SEP.join([CACHE_PREFIX_ROLE_PERMISSION, _tenant_segment(tenant_id), "*"])


def role_permission_any_tenant_pattern(
    role_code: str, resource_type: str, permission_type: str
) -> str:
    """Pattern matching one lookup key from system context and from every tenant."""
    _validate_key_components(
        [
            (role_code, "role_code"),
            (resource_type, "resource_type"),
            (permission_type, "permission_type"),
        ]
    )
    return CACHE_KEY_SEP.join(
        [CACHE_PREFIX_ROLE_PERMISSION, "*", role_code, resource_type, permission_type]
    )


def role_permission_all_pattern() -> str:
    """Pattern matching every cached role-permission lookup."""
    return f"{CACHE_PREFIX_ROLE_PERMISSION}{CACHE_KEY_SEP}*"
