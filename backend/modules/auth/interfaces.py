"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and swapping the identity provider.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthContext, Role

from .models import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UpdateProfileRequest,
    UserProfile,
    VerifiedIdentity,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def validate_token(self, token: str) -> VerifiedIdentity:
        """
        Verify a bearer token with the identity provider.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...

    async def resolve_role(self, identity: VerifiedIdentity) -> Role:
        """
        Return the role to authorize this request with.

        Reads the application user record on every call, creating a
        resident record if none exists. Token role claims are ignored.
        """
        ...

    async def authenticate(self, token: str) -> AuthContext:
        """
        Verify the token and resolve the role.

        Returns:
            AuthContext for the current request
        """
        ...

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        ...

    async def login(self, request: LoginRequest) -> LoginResponse:
        ...

    async def request_password_reset(self, email: str) -> None:
        """Never reveals whether the email exists."""
        ...

    async def get_profile(self, context: AuthContext) -> UserProfile:
        ...

    async def update_profile(
        self,
        context: AuthContext,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        ...

    async def change_password(
        self,
        context: AuthContext,
        request: ChangePasswordRequest,
    ) -> None:
        ...
