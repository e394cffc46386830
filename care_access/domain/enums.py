"""Domain enumerations for role-based access control.

Enums represent fixed sets of domain values (e.g. operation kinds).
"""

from enum import Enum


class PermissionType(str, Enum):
    """Operation kind a role permission applies to.

    Stored in role_permissions.permission_type as a single letter.
    """

    CREATE = "C"
    READ = "R"
    UPDATE = "U"
    DELETE = "D"

    @classmethod
    def values(cls) -> list[str]:
        """Return all stored letters (e.g. for validation or serialization)."""
        return [p.value for p in cls]

    @classmethod
    def parse(cls, value: "PermissionType | str") -> "PermissionType":
        """Accept a member, its stored letter ('R') or its name in any case ('Read', 'read').

        Raises:
            ValueError: If value matches no operation kind.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        if text.upper() in cls.values():
            return cls(text.upper())
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(
                f"Invalid permission_type {value!r} (must be one of "
                f"{', '.join(cls.values())} or Create/Read/Update/Delete)"
            ) from None

    @property
    def label(self) -> str:
        """Human-readable operation name (Create, Read, Update, Delete)."""
        return self.name.capitalize()
