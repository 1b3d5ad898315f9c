"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, malformed or revoked."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when email/password sign-in fails."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class AdminRequiredError(AuthorizationError):
    """Raised when a non-admin reaches an admin-only route."""

    def __init__(self, user_role: str):
        super().__init__(
            "Admin privileges required",
            code="ADMIN_REQUIRED",
            details={"user_role": user_role},
        )


class EmailAlreadyExistsError(ValidationError):
    """Raised when registering an email the identity provider already knows."""

    def __init__(self, email: str):
        super().__init__(
            "Email already in use",
            code="EMAIL_EXISTS",
            details={"email": email},
        )


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider fails unexpectedly."""

    def __init__(self, message: str = "Identity provider request failed"):
        super().__init__(message, service="identity", code="IDENTITY_PROVIDER_ERROR")
