"""Tests for the in-memory role-permission and role stores."""

import pytest

from care_access.domain.entities import RoleEntity
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import ValidationException
from care_access.domain.value_objects import PermissionKey
from care_access.infrastructure.persistence.repositories import (
    InMemoryRolePermissionStore,
    InMemoryRoleRepository,
)


async def test_get_by_key_is_exact_on_tenant() -> None:
    store = InMemoryRolePermissionStore()
    system = store.add(None, "Nurse", "residents", "R", assigned_only=True)
    key = PermissionKey.of("Nurse", "residents", "R")
    assert await store.get_by_key(None, key) == system
    assert await store.get_by_key("t1", key) is None


async def test_add_generates_id_and_parses_type() -> None:
    store = InMemoryRolePermissionStore()
    row = store.add("t1", "Nurse", "residents", "update")
    assert row.permission_id
    assert row.permission_type is PermissionType.UPDATE
    assert await store.get_by_id(row.permission_id) == row


def test_duplicate_key_rejected() -> None:
    store = InMemoryRolePermissionStore()
    store.add(None, "Nurse", "residents", "R")
    store.add("t1", "Nurse", "residents", "R")
    with pytest.raises(ValidationException):
        store.add(None, "Nurse", "residents", "Read")


async def test_list_permissions_orders_tenant_before_system(store) -> None:
    rows, total = await store.list_permissions("tenant-a", skip=0, limit=None)
    assert total == len(rows) == 11
    keys = [(r.role_code, r.resource_type, r.permission_type.value, r.is_system) for r in rows]
    assert keys == sorted(keys)


async def test_role_repository() -> None:
    repo = InMemoryRoleRepository([RoleEntity("Nurse", "Nurse"), RoleEntity("Admin", "Admin")])
    repo.add(RoleEntity("Old", "Old", is_active=False))
    assert [r.role_code for r in await repo.list_roles()] == ["Admin", "Nurse", "Old"]
    assert [r.role_code for r in await repo.list_roles(active_only=True)] == ["Admin", "Nurse"]
    assert (await repo.get_by_code("Nurse")).display_name == "Nurse"
    assert await repo.get_by_code("Missing") is None
