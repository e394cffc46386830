"""Application services: permission resolution, query scoping, authorization, reporting."""

from care_access.application.services.authorization_service import AuthorizationService
from care_access.application.services.permission_resolver import PermissionResolver
from care_access.application.services.query_scope import (
    RESIDENT_CAREGIVERS,
    AssignmentTarget,
    ScopedQuery,
    apply_assignment_filter,
    apply_branch_filter,
)
from care_access.application.services.role_permission_service import RolePermissionService

__all__ = [
    "AssignmentTarget",
    "AuthorizationService",
    "PermissionResolver",
    "RESIDENT_CAREGIVERS",
    "RolePermissionService",
    "ScopedQuery",
    "apply_assignment_filter",
    "apply_branch_filter",
]
