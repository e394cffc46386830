"""Domain exceptions for the care access-control engine.

Defines domain-level exceptions for permission resolution and query
scoping. Presentation layer maps them to HTTP responses in exception
handlers; operational scripts decide themselves whether to exit.
"""

from typing import Any


class CareAccessException(Exception):
    """Base exception for all care-access errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, role_code).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CareAccessException):
    """Raised when input validation fails (e.g. empty identifier or bad alias)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or argument that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthorizationException(CareAccessException):
    """Raised when the caller is denied an operation on a resource."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'residents').
            action: Optional operation that was attempted (e.g. 'R').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class PermissionNotFoundException(CareAccessException):
    """Raised when neither a tenant row nor a system row matches the lookup key.

    Callers must treat this as deny, never as unrestricted access.
    """

    def __init__(
        self,
        role_code: str,
        resource_type: str,
        permission_type: str,
        tenant_id: str | None = None,
    ) -> None:
        """Initialize with the lookup key that matched nothing.

        Args:
            role_code: Role that was resolved (e.g. 'Nurse').
            resource_type: Resource category (e.g. 'residents').
            permission_type: Operation letter (C, R, U, D).
            tenant_id: Tenant of the caller, or None for system context.
        """
        super().__init__(
            f"No permission configured: role_code={role_code}, "
            f"resource_type={resource_type}, permission_type={permission_type}",
            "PERMISSION_NOT_FOUND",
            {
                "role_code": role_code,
                "resource_type": resource_type,
                "permission_type": permission_type,
                "tenant_id": tenant_id,
            },
        )


class StoreUnavailableException(CareAccessException):
    """Raised when the permission store cannot be read (connectivity/transport)."""

    def __init__(self, reason: str) -> None:
        """Initialize with the underlying failure description.

        Args:
            reason: Driver or transport error text.
        """
        super().__init__(
            "Permission store unavailable",
            "STORE_UNAVAILABLE",
            {"reason": reason},
        )


class ResourceNotFoundException(CareAccessException):
    """Raised when a requested record is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role_permission').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(CareAccessException):
    """Raised when an operation requires the SQL store but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
