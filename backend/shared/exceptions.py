"""
Base exception classes for the Mapsy backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status code, so feature
modules never build HTTP responses themselves.
"""

from typing import Optional, Any


class MapsyError(Exception):
    """
    Base exception for all Mapsy errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(MapsyError):
    """Resource not found."""

    pass


class ValidationError(MapsyError):
    """Input validation failed."""

    pass


class AuthenticationError(MapsyError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(MapsyError):
    """Authorization failed (record is outside the caller's scope)."""

    pass


class ServerConfigurationError(MapsyError):
    """A required secret or credential is not configured on the server."""

    def __init__(self, setting: str, message: Optional[str] = None):
        super().__init__(
            message or "Server configuration error",
            code="SERVER_CONFIGURATION",
            details={"setting": setting},
        )


class DuplicateKeyError(MapsyError):
    """A write collided with a unique key in the backing store."""

    def __init__(self, collection: str, field: str, value: Any):
        super().__init__(
            f"Duplicate value for {collection}.{field}: {value}",
            code="DUPLICATE_KEY",
            details={"collection": collection, "field": field, "value": value},
        )
        self.collection = collection
        self.field = field
        self.value = value


class ExternalServiceError(MapsyError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
