"""Authorization service: cached permission resolution and query scoping for callers."""

from __future__ import annotations

from care_access.application.dtos.access import UserAccessContext
from care_access.application.interfaces.services import ICacheService, IPermissionResolver
from care_access.application.services.query_scope import (
    RESIDENT_CAREGIVERS,
    AssignmentTarget,
    ScopedQuery,
    apply_assignment_filter,
    apply_branch_filter,
)
from care_access.domain.enums import PermissionType
from care_access.domain.exceptions import (
    AuthorizationException,
    PermissionNotFoundException,
    ValidationException,
)
from care_access.domain.value_objects import PermissionFlags, PermissionKey
from care_access.infrastructure.cache.keys import (
    role_permission_all_pattern,
    role_permission_any_tenant_pattern,
    role_permission_key,
    role_permission_tenant_pattern,
)


class AuthorizationService:
    """Resolves scoping flags (cached when a cache is available) and applies them to queries."""

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache
        self.cache_ttl = cache_ttl

    def _cache_ready(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def get_flags(
        self,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
        tenant_id: str | None = None,
    ) -> PermissionFlags:
        """Return effective flags; PermissionNotFoundException propagates and is never cached."""
        key = PermissionKey.of(role_code, resource_type, permission_type)
        cache_key = role_permission_key(
            tenant_id, key.role_code, key.resource_type, key.permission_type.value
        )
        if self._cache_ready():
            cached = await self.cache.get(cache_key)
            if cached is not None:
                return PermissionFlags.from_dict(cached)

        flags = await self.permission_resolver.resolve(
            key.role_code, key.resource_type, key.permission_type, tenant_id
        )
        if self._cache_ready():
            await self.cache.set(cache_key, flags.to_dict(), ttl=self.cache_ttl)
        return flags

    async def require_flags(
        self,
        context: UserAccessContext,
        resource_type: str,
        permission_type: PermissionType | str,
    ) -> PermissionFlags:
        """Return flags for the caller's role; deny (AuthorizationException) when none is configured."""
        try:
            return await self.get_flags(
                context.role_code, resource_type, permission_type, context.tenant_id
            )
        except PermissionNotFoundException as e:
            raise AuthorizationException(
                resource=resource_type,
                action=e.details["permission_type"],
            ) from e

    async def scope_query(
        self,
        query: ScopedQuery,
        context: UserAccessContext,
        resource_type: str,
        permission_type: PermissionType | str,
        *,
        branch_alias: str | None = None,
        assignment_alias: str | None = None,
        assignment: AssignmentTarget = RESIDENT_CAREGIVERS,
    ) -> PermissionFlags:
        """Resolve flags for the caller and append the branch/assignment predicates they require.

        Branch predicate first, assignment predicate second. A flag that is
        set but has no alias to apply it to raises ValidationException rather
        than returning an unscoped query.

        Raises:
            AuthorizationException: No permission row for the caller's role.
            ValidationException: Required alias missing or invalid.
        """
        flags = await self.require_flags(context, resource_type, permission_type)
        if flags.branch_only and branch_alias is None:
            raise ValidationException(
                f"{resource_type} requires branch scoping but no branch alias was given",
                field="branch_alias",
            )
        if flags.assigned_only and assignment_alias is None:
            raise ValidationException(
                f"{resource_type} requires assignment scoping but no assignment alias was given",
                field="assignment_alias",
            )
        if branch_alias is not None:
            apply_branch_filter(query, context.branch_tag, branch_alias, flags.branch_only)
        if assignment_alias is not None:
            apply_assignment_filter(
                query,
                context.user_id,
                assignment_alias,
                flags.assigned_only,
                assignment=assignment,
            )
        return flags

    async def invalidate_permission(
        self,
        tenant_id: str | None,
        role_code: str,
        resource_type: str,
        permission_type: PermissionType | str,
    ) -> None:
        """Invalidate after one row changed. A system row change affects every tenant's lookups."""
        if not self._cache_ready():
            return
        key = PermissionKey.of(role_code, resource_type, permission_type)
        if tenant_id:
            await self.cache.delete(
                role_permission_key(
                    tenant_id, key.role_code, key.resource_type, key.permission_type.value
                )
            )
            return
        await self.cache.delete_pattern(
            role_permission_any_tenant_pattern(
                key.role_code, key.resource_type, key.permission_type.value
            )
        )

    async def invalidate_tenant_cache(self, tenant_id: str | None) -> None:
        """Invalidate all cached lookups made from one tenant (or from system context)."""
        if self._cache_ready():
            await self.cache.delete_pattern(role_permission_tenant_pattern(tenant_id))

    async def invalidate_all(self) -> None:
        """Invalidate every cached lookup (e.g. after a bulk reference-data migration)."""
        if self._cache_ready():
            await self.cache.delete_pattern(role_permission_all_pattern())
