"""
Authentication module.

Handles token verification, role resolution and the self-service account
endpoints.

Public API:
- IAuthService: Interface for auth operations
- IIdentityProvider: Identity provider capability (Supabase or in-memory)
- UserProfile: Identity fields merged with the application user record
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .identity import IIdentityProvider, decode_access_token
from .models import JWTPayload, VerifiedIdentity, UserProfile
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    AdminRequiredError,
    EmailAlreadyExistsError,
    IdentityProviderError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IIdentityProvider",
    "decode_access_token",
    # Models
    "JWTPayload",
    "VerifiedIdentity",
    "UserProfile",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "AdminRequiredError",
    "EmailAlreadyExistsError",
    "IdentityProviderError",
]
