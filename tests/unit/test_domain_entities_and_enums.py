"""Tests for domain enums, value objects and entities."""

import pytest

from care_access.domain.entities import RoleEntity, RolePermissionEntity
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import ValidationException
from care_access.domain.value_objects import (
    PermissionFlags,
    PermissionKey,
    validate_table_alias,
)


def test_permission_type_values() -> None:
    assert PermissionType.values() == ["C", "R", "U", "D"]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("R", PermissionType.READ),
        ("r", PermissionType.READ),
        ("Read", PermissionType.READ),
        (" delete ", PermissionType.DELETE),
        (PermissionType.CREATE, PermissionType.CREATE),
    ],
)
def test_permission_type_parse(raw, expected) -> None:
    assert PermissionType.parse(raw) is expected


@pytest.mark.parametrize("raw", ["", "X", "list", "RU"])
def test_permission_type_parse_rejects_unknown(raw) -> None:
    with pytest.raises(ValueError):
        PermissionType.parse(raw)


def test_permission_type_label() -> None:
    assert PermissionType.UPDATE.label == "Update"


def test_permission_flags_round_trip_dict() -> None:
    flags = PermissionFlags(assigned_only=True, branch_only=False)
    assert PermissionFlags.from_dict(flags.to_dict()) == flags
    assert not flags.unrestricted
    assert PermissionFlags(False, False).unrestricted


def test_permission_key_of_parses_type() -> None:
    key = PermissionKey.of("Nurse", "residents", "update")
    assert key.permission_type is PermissionType.UPDATE


def test_permission_key_of_bad_type_is_validation_error() -> None:
    with pytest.raises(ValidationException) as exc_info:
        PermissionKey.of("Nurse", "residents", "Z")
    assert exc_info.value.details == {"field": "permission_type"}


def test_permission_key_rejects_raw_string_type() -> None:
    with pytest.raises(ValidationException):
        PermissionKey("Nurse", "residents", "R")


@pytest.mark.parametrize("alias", ["u", "units_1", "_t", "R2"])
def test_validate_table_alias_accepts_identifiers(alias: str) -> None:
    assert validate_table_alias(alias) == alias


def test_validate_table_alias_rejects_long_alias() -> None:
    with pytest.raises(ValidationException):
        validate_table_alias("a" * 64)


def test_role_permission_entity_properties() -> None:
    row = RolePermissionEntity(
        permission_id="p1",
        tenant_id=None,
        role_code="Manager",
        resource_type="residents",
        permission_type=PermissionType.READ,
        branch_only=True,
    )
    assert row.is_system
    assert row.flags == PermissionFlags(assigned_only=False, branch_only=True)


def test_role_permission_entity_requires_fields() -> None:
    with pytest.raises(ValidationException):
        RolePermissionEntity("p1", "t1", "", "residents", PermissionType.READ)


def test_role_entity_display_name_and_detail() -> None:
    role = RoleEntity("Manager", "Branch Manager\nManages one branch")
    assert role.display_name == "Branch Manager"
    assert role.detail == "Manages one branch"


def test_role_entity_display_name_falls_back_to_code() -> None:
    role = RoleEntity("Auditor", "")
    assert role.display_name == "Auditor"
    assert role.detail == ""
