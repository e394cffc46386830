"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, stores, and application services.
Routes depend only on these; tests swap the stores through
app.dependency_overrides (e.g. the in-memory store).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from care_access.application.interfaces.repositories import (
    IRolePermissionStore,
    IRoleRepository,
)
from care_access.application.services import (
    AuthorizationService,
    PermissionResolver,
    RolePermissionService,
)
from care_access.core.config import get_settings
from care_access.core.tenant_validation import is_valid_tenant_id_format
from care_access.domain.exceptions import ValidationException
from care_access.infrastructure.persistence.database import get_db
from care_access.infrastructure.persistence.repositories import (
    RolePermissionStore,
    RoleRepository,
)


def get_optional_tenant_id(request: Request) -> str | None:
    """Return the tenant id from the tenant header, or None (system rows only) when absent."""
    name = get_settings().tenant_header_name
    value = request.headers.get(name)
    if not value:
        return None
    if not is_valid_tenant_id_format(value):
        raise ValidationException(
            "Invalid tenant ID format (use alphanumeric, hyphen, underscore; max 64 characters)",
            field=name,
        )
    return value


async def get_permission_store(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IRolePermissionStore:
    return RolePermissionStore(db)


async def get_role_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> IRoleRepository:
    return RoleRepository(db)


async def get_permission_resolver(
    store: Annotated[IRolePermissionStore, Depends(get_permission_store)],
) -> PermissionResolver:
    return PermissionResolver(store)


async def get_authorization_service(
    request: Request,
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
) -> AuthorizationService:
    """Build AuthorizationService with optional cache.

    Cache is set in app lifespan (app.state.cache) when Redis is enabled;
    otherwise cache is None and every resolution hits the store.
    """
    settings = get_settings()
    cache = getattr(request.app.state, "cache", None)
    return AuthorizationService(
        permission_resolver=resolver,
        cache=cache,
        cache_ttl=settings.cache_ttl_permissions,
    )


async def get_role_permission_service(
    store: Annotated[IRolePermissionStore, Depends(get_permission_store)],
    role_repo: Annotated[IRoleRepository, Depends(get_role_repo)],
) -> RolePermissionService:
    return RolePermissionService(store, role_repo)
