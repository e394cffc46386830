"""Domain value objects for access control.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import ValidationException

# SQL identifier accepted as a table alias (e.g. u, r, units_1).
_ALIAS_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")


def validate_table_alias(alias: str) -> str:
    """Return alias if it is a plain SQL identifier. Raises ValidationException otherwise."""
    if not alias:
        raise ValidationException("Table alias must be a non-empty string", field="table_alias")
    if not _ALIAS_RE.fullmatch(alias):
        raise ValidationException(
            f"Table alias must be a plain SQL identifier, got {alias!r}",
            field="table_alias",
        )
    return alias


@dataclass(frozen=True)
class PermissionFlags:
    """Effective scoping flags for one role/resource/operation.

    assigned_only: restrict to records the acting user is assigned to.
    branch_only: restrict to records in the acting user's branch.
    """

    assigned_only: bool
    branch_only: bool

    @property
    def unrestricted(self) -> bool:
        """True when neither scoping applies."""
        return not (self.assigned_only or self.branch_only)

    def to_dict(self) -> dict[str, bool]:
        return {"assigned_only": self.assigned_only, "branch_only": self.branch_only}

    @classmethod
    def from_dict(cls, data: dict[str, bool]) -> "PermissionFlags":
        return cls(
            assigned_only=bool(data["assigned_only"]),
            branch_only=bool(data["branch_only"]),
        )


@dataclass(frozen=True)
class PermissionKey:
    """Lookup key (role_code, resource_type, permission_type); validated on construction."""

    role_code: str
    resource_type: str
    permission_type: PermissionType

    def __post_init__(self) -> None:
        if not self.role_code or not self.role_code.strip():
            raise ValidationException("role_code is required", field="role_code")
        if not self.resource_type or not self.resource_type.strip():
            raise ValidationException("resource_type is required", field="resource_type")
        if not isinstance(self.permission_type, PermissionType):
            raise ValidationException(
                "permission_type must be a PermissionType", field="permission_type"
            )

    @classmethod
    def of(
        cls,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
    ) -> "PermissionKey":
        """Build a key, parsing permission_type from a letter or name."""
        try:
            parsed = PermissionType.parse(permission_type)
        except ValueError as e:
            raise ValidationException(str(e), field="permission_type") from None
        return cls(role_code=role_code, resource_type=resource_type, permission_type=parsed)
