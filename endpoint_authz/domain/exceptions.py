"""Domain exceptions for endpoint-authz.

Defines domain-level exceptions that represent authorization failures and
business rule violations. Callers map them to their own transport errors
using message, error_code, and details.
"""

from typing import Any


class EndpointAuthzException(Exception):
    """Base exception for all endpoint-authz errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
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


class ValidationException(EndpointAuthzException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnauthorizedException(EndpointAuthzException):
    """Raised when the caller lacks a permission covering the operation.

    Also raised when no authorizer is bound to the request context and when
    a collection read is submitted without an org or user scope. Details
    carry only what an audit log needs (action, resource type, target id).
    """

    def __init__(
        self,
        message: str = "unauthorized",
        action: str | None = None,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        """Initialize with message and optional audit context.

        Args:
            message: Human-readable message.
            action: Optional action that was attempted (e.g. 'read', 'write').
            resource_type: Optional resource type (e.g. 'notificationEndpoints').
            resource_id: Optional target resource id.
        """
        details: dict[str, Any] = {}
        if action:
            details["action"] = action
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message, "UNAUTHORIZED", details)


class InvalidPermissionException(EndpointAuthzException):
    """Raised when a permission cannot be constructed (malformed identifiers)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "INVALID_PERMISSION", details)


class ResourceNotFoundException(EndpointAuthzException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'notificationEndpoints').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(EndpointAuthzException):
    """Raised when a write collides with existing state (e.g. duplicate name in an org)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFLICT", details)
