"""Unit tests for AuthorizationService (cached resolution, deny conversion, query scoping)."""

from unittest.mock import AsyncMock

import pytest

from care_access.application.dtos import UserAccessContext
from care_access.application.services import (
    AuthorizationService,
    PermissionResolver,
    ScopedQuery,
)
from care_access.domain.exceptions import AuthorizationException, ValidationException
from care_access.domain.value_objects import PermissionFlags
from care_access.infrastructure.persistence.repositories import InMemoryRolePermissionStore

BASE = "SELECT * FROM residents r LEFT JOIN units u ON u.unit_id = r.unit_id"


@pytest.fixture
def service(store, cache) -> AuthorizationService:
    return AuthorizationService(PermissionResolver(store), cache=cache, cache_ttl=60)


async def test_get_flags_caches_result(service, cache) -> None:
    flags = await service.get_flags("Manager", "residents", "R", "tenant-a")
    assert flags == PermissionFlags(assigned_only=True, branch_only=True)
    key = "role_permission:t=tenant-a:Manager:residents:R"
    assert cache.data[key] == {"assigned_only": True, "branch_only": True}
    assert cache.ttls[key] == 60


async def test_get_flags_serves_from_cache(cache) -> None:
    resolver = AsyncMock()
    cache.data["role_permission:system:Nurse:residents:R"] = {
        "assigned_only": False,
        "branch_only": True,
    }
    service = AuthorizationService(resolver, cache=cache)
    flags = await service.get_flags("Nurse", "residents", "Read")
    assert flags == PermissionFlags(assigned_only=False, branch_only=True)
    resolver.resolve.assert_not_awaited()


async def test_get_flags_without_available_cache_hits_resolver(store, cache) -> None:
    cache.available = False
    service = AuthorizationService(PermissionResolver(store), cache=cache)
    flags = await service.get_flags("Admin", "residents", "R", "tenant-a")
    assert flags.unrestricted
    assert cache.data == {}


async def test_require_flags_denies_when_not_configured(service, cache) -> None:
    context = UserAccessContext(user_id="u1", role_code="Nurse", tenant_id="tenant-a")
    with pytest.raises(AuthorizationException) as exc_info:
        await service.require_flags(context, "residents", "D")
    assert exc_info.value.error_code == "PERMISSION_DENIED"
    assert exc_info.value.details == {"resource": "residents", "action": "D"}
    assert cache.data == {}


async def test_scope_query_applies_branch_for_manager(service) -> None:
    context = UserAccessContext(
        user_id="u1", role_code="Manager", tenant_id="tenant-b", branch_tag="BranchA"
    )
    q = ScopedQuery(BASE)
    flags = await service.scope_query(
        q, context, "residents", "R", branch_alias="u", assignment_alias="r"
    )
    assert flags == PermissionFlags(assigned_only=False, branch_only=True)
    assert q.sql == BASE + " WHERE u.branch_tag = $1"
    assert q.args == ["BranchA"]


async def test_scope_query_applies_both_filters_in_order(service) -> None:
    context = UserAccessContext(user_id="u1", role_code="Manager", tenant_id="tenant-a")
    q = ScopedQuery(BASE)
    await service.scope_query(q, context, "residents", "R", branch_alias="u", assignment_alias="r")
    assert q.sql.startswith(
        BASE + " WHERE (u.branch_tag IS NULL OR u.branch_tag = '-') AND EXISTS ("
    )
    assert q.args == ['%"u1"%']


async def test_scope_query_admin_is_unscoped(service) -> None:
    context = UserAccessContext(user_id="u1", role_code="Admin", tenant_id="tenant-a")
    q = ScopedQuery(BASE)
    await service.scope_query(q, context, "residents", "R", branch_alias="u", assignment_alias="r")
    assert q.sql == BASE
    assert q.args == []


async def test_scope_query_requires_alias_for_set_flag(service) -> None:
    context = UserAccessContext(user_id="u1", role_code="Nurse", tenant_id="tenant-a")
    with pytest.raises(ValidationException) as exc_info:
        await service.scope_query(ScopedQuery(BASE), context, "residents", "R", branch_alias="u")
    assert exc_info.value.details == {"field": "assignment_alias"}


async def test_invalidate_permission_for_tenant_deletes_one_key(service, cache) -> None:
    await service.get_flags("Manager", "residents", "R", "tenant-a")
    await service.get_flags("Manager", "residents", "R", "tenant-b")
    await service.invalidate_permission("tenant-a", "Manager", "residents", "R")
    assert list(cache.data) == ["role_permission:t=tenant-b:Manager:residents:R"]


async def test_invalidate_system_permission_clears_every_tenant(service, cache) -> None:
    await service.get_flags("Manager", "residents", "R", "tenant-a")
    await service.get_flags("Manager", "residents", "R", "tenant-b")
    await service.get_flags("Manager", "residents", "R", None)
    await service.get_flags("Admin", "residents", "R", None)
    await service.invalidate_permission(None, "Manager", "residents", "R")
    assert list(cache.data) == ["role_permission:system:Admin:residents:R"]


async def test_invalidate_tenant_and_all(service, cache) -> None:
    await service.get_flags("Manager", "residents", "R", "tenant-a")
    await service.get_flags("Admin", "residents", "C", "tenant-a")
    await service.get_flags("Admin", "residents", "C", "tenant-b")
    await service.invalidate_tenant_cache("tenant-a")
    assert list(cache.data) == ["role_permission:t=tenant-b:Admin:residents:C"]
    await service.invalidate_all()
    assert cache.data == {}


async def test_tenant_named_system_is_not_served_to_system_context(cache) -> None:
    store = InMemoryRolePermissionStore()
    store.add(None, "Nurse", "residents", "R", assigned_only=True)
    store.add("system", "Nurse", "residents", "R")
    service = AuthorizationService(PermissionResolver(store), cache=cache)

    tenant_flags = await service.get_flags("Nurse", "residents", "R", "system")
    system_flags = await service.get_flags("Nurse", "residents", "R", None)

    assert tenant_flags.unrestricted
    assert system_flags == PermissionFlags(assigned_only=True, branch_only=False)
    assert len(cache.data) == 2


async def test_system_context_is_not_served_to_tenant_named_system(cache) -> None:
    store = InMemoryRolePermissionStore()
    store.add(None, "Nurse", "residents", "R", assigned_only=True)
    store.add("system", "Nurse", "residents", "R", branch_only=True)
    service = AuthorizationService(PermissionResolver(store), cache=cache)

    await service.get_flags("Nurse", "residents", "R", None)
    flags = await service.get_flags("Nurse", "residents", "R", "system")

    assert flags == PermissionFlags(assigned_only=False, branch_only=True)


@pytest.mark.parametrize("role_code", ["Nurse:x", "Nurse*", "Nu[r]se"])
async def test_get_flags_rejects_key_characters_as_validation_error(service, role_code) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.get_flags(role_code, "residents", "R", None)
    assert exc_info.value.details == {"field": "role_code"}


async def test_scope_query_rejects_separator_in_resource(service) -> None:
    context = UserAccessContext(user_id="u1", role_code="Nurse", tenant_id="tenant-a")
    q = ScopedQuery(BASE)
    with pytest.raises(ValidationException):
        await service.scope_query(q, context, "resi:dents", "R", assignment_alias="r")
    assert q.sql == BASE
