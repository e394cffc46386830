"""Pytest configuration and fixtures for care_access.

HTTP tests use care_access.main:app with the SQL stores swapped for the
in-memory stores through dependency overrides. DB-dependent fixtures use
care_access.infrastructure.persistence.database and skip without DATABASE_URL.
"""

import fnmatch
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from care_access.api.v1.dependencies import get_permission_store, get_role_repo
from care_access.core.constants import SYSTEM_TENANT_ID
from care_access.domain.entities import RoleEntity
from care_access.domain.enums import PermissionType
from care_access.infrastructure.persistence import database
from care_access.infrastructure.persistence.repositories import (
    InMemoryRolePermissionStore,
    InMemoryRoleRepository,
)
from care_access.main import app

TENANT_A = "tenant-a"
TENANT_B = "tenant-b"


def build_store() -> InMemoryRolePermissionStore:
    """System rows for residents plus one tenant-specific override for TENANT_A."""
    store = InMemoryRolePermissionStore()
    for op in PermissionType:
        store.add(None, "Admin", "residents", op, permission_id=f"sys-admin-res-{op.value}")
        store.add(
            None,
            "Manager",
            "residents",
            op,
            branch_only=True,
            permission_id=f"sys-manager-res-{op.value}",
        )
    store.add(
        None,
        "Nurse",
        "residents",
        PermissionType.READ,
        assigned_only=True,
        permission_id="sys-nurse-res-R",
    )
    store.add(
        None,
        "Manager",
        "users",
        PermissionType.READ,
        branch_only=True,
        permission_id="sys-manager-users-R",
    )
    store.add(
        TENANT_A,
        "Manager",
        "residents",
        PermissionType.READ,
        assigned_only=True,
        branch_only=True,
        permission_id="a-manager-res-R",
    )
    store.add(
        TENANT_B,
        "Nurse",
        "residents",
        PermissionType.READ,
        permission_id="b-nurse-res-R",
    )
    return store


def build_roles() -> InMemoryRoleRepository:
    return InMemoryRoleRepository(
        [
            RoleEntity("Admin", "Administrator\nFull access within the tenant", is_system=True),
            RoleEntity("Manager", "Branch Manager\nManages one branch", is_system=True),
            RoleEntity("Nurse", "Nurse\nCares for assigned residents"),
            RoleEntity("Auditor", "Auditor", is_active=False),
        ]
    )


class FakeCache:
    """Dict-backed ICacheService; delete_pattern matches keys like Redis SCAN MATCH."""

    def __init__(self, available: bool = True) -> None:
        self.data: dict[str, Any] = {}
        self.available = available
        self.ttls: dict[str, int] = {}

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any | None:
        return self.data.get(key)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        self.data.pop(key, None)
        return True

    async def delete_pattern(self, pattern: str) -> int:
        matched = [k for k in self.data if fnmatch.fnmatchcase(k, pattern)]
        for k in matched:
            del self.data[k]
        return len(matched)


@pytest.fixture
def cache() -> FakeCache:
    """Empty in-process permission cache."""
    return FakeCache()


@pytest.fixture
def store() -> InMemoryRolePermissionStore:
    """Seeded in-memory permission store."""
    return build_store()


@pytest.fixture
def role_repo() -> InMemoryRoleRepository:
    """Seeded in-memory role repository."""
    return build_roles()


@pytest.fixture
def default_tenant_id() -> str:
    return SYSTEM_TENANT_ID


@pytest.fixture
async def client(
    store: InMemoryRolePermissionStore, role_repo: InMemoryRoleRepository
) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), backed by the in-memory stores."""
    app.dependency_overrides[get_permission_store] = lambda: store
    app.dependency_overrides[get_role_repo] = lambda: role_repo
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL. Skips (pytest.skip) when it is not configured.
    Creates the role tables if missing. Use @pytest.mark.requires_db to mark
    tests that need this fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("SQL database not configured: set DATABASE_URL")
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
    await database.dispose_engine()
