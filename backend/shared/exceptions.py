"""
Base exception classes for the Residence Portal backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code, so a module
exception only has to pick the right parent.
"""

from typing import Optional, Any


class PortalError(Exception):
    """
    Base exception for all portal errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

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


class NotFoundError(PortalError):
    """Resource not found."""

    status_code = 404


class ValidationError(PortalError):
    """Input validation or business rule failed."""

    status_code = 400


class AuthenticationError(PortalError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(PortalError):
    """Authorization failed (insufficient role or not the owner)."""

    status_code = 403


class ExternalServiceError(PortalError):
    """Error communicating with the database or identity provider."""

    status_code = 500

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code or "UPSTREAM_ERROR", details)
        self.service = service
        self.details["service"] = service
