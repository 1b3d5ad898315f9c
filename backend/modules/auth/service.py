"""
Authentication service implementation.

Verifies bearer tokens, resolves the caller's role from the application
user record, and implements the self-service account endpoints.
"""

import logging
import time
from datetime import datetime, timezone

from shared.config import Settings
from shared.exceptions import NotFoundError, PortalError
from shared.models import AuthContext, Role, drop_unset
from modules.users.models import UserRecord
from modules.users.store import IUserStore

from .identity import IIdentityProvider
from .interfaces import IAuthService
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
from .exceptions import MissingTokenError

logger = logging.getLogger(__name__)

DEV_IDENTITY = VerifiedIdentity(
    id="dev-user-123",
    email="dev@example.com",
    email_verified=True,
    display_name="Development User",
)


def merge_profile(identity_email: str, email_verified: bool, record: UserRecord) -> UserProfile:
    """Combine identity provider fields with the application user record."""
    return UserProfile(
        id=record.id,
        email=identity_email or record.email,
        email_verified=email_verified,
        role=record.role,
        display_name=record.display_name,
        phone_number=record.phone_number,
        flat_number=record.flat_number,
        block_number=record.block_number,
        photo_url=record.photo_url,
        privacy=record.privacy,
        emergency_contact=record.emergency_contact,
        created_at=record.created_at,
        updated_at=record.updated_at,
        last_login=record.last_login,
    )


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Stateless: every call re-verifies the token and re-reads the user
    record, so a role change is visible on the very next request.
    """

    def __init__(
        self,
        identity: IIdentityProvider,
        users: IUserStore,
        settings: Settings,
    ):
        self._identity = identity
        self._users = users
        self._settings = settings

    # ------------------------------------------------------------------
    # Token verification and role resolution
    # ------------------------------------------------------------------

    async def validate_token(self, token: str) -> VerifiedIdentity:
        """
        Verify a bearer token.

        In development mode with the bypass enabled, tokens carrying the
        dev prefix map to a fixed development identity. The role for that
        identity still comes from its user record.
        """
        if not token:
            raise MissingTokenError()

        if self._settings.dev_bypass_active and token.startswith(self._settings.dev_token_prefix):
            logger.warning("Development token bypass used for %s", DEV_IDENTITY.id)
            return DEV_IDENTITY

        return self._identity.verify_token(token)

    async def resolve_role(self, identity: VerifiedIdentity) -> Role:
        record = self._users.get(identity.id)
        if record is None:
            record = self._users.create_default(
                identity.id,
                identity.email,
                display_name=identity.display_name,
                phone_number=identity.phone or "",
            )
        if identity.role_claim and identity.role_claim not in ("authenticated", record.role.value):
            logger.debug(
                "Ignoring token role claim %r for %s (record role %s)",
                identity.role_claim, identity.id, record.role.value,
            )
        return record.role

    async def authenticate(self, token: str) -> AuthContext:
        identity = await self.validate_token(token)
        role = await self.resolve_role(identity)
        return AuthContext(
            identity_id=identity.id,
            email=identity.email,
            role=role,
            email_verified=identity.email_verified,
        )

    # ------------------------------------------------------------------
    # Account endpoints
    # ------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        identity = self._identity.create_user(
            request.email,
            request.password,
            display_name=request.display_name,
            phone=request.phone_number,
        )
        record = self._users.create_default(
            identity.id,
            identity.email,
            display_name=request.display_name,
            phone_number=request.phone_number or "",
        )
        logger.info("New user registered: %s", identity.id)

        token = None
        if self._settings.dev_bypass_active:
            token = f"{self._settings.dev_token_prefix}{int(time.time())}"

        return RegisterResponse(
            user=merge_profile(identity.email, identity.email_verified, record),
            token=token,
        )

    async def login(self, request: LoginRequest) -> LoginResponse:
        result = self._identity.sign_in(request.email, request.password)
        identity = result.identity

        record = self._users.create_default(
            identity.id,
            identity.email,
            display_name=identity.display_name,
            phone_number=identity.phone or "",
        )
        record = self._users.update(
            identity.id,
            {"last_login": datetime.now(timezone.utc).isoformat()},
        ) or record
        logger.info("User logged in: %s", identity.id)

        return LoginResponse(
            user=merge_profile(identity.email, identity.email_verified, record),
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            expires_in=result.expires_in,
        )

    async def request_password_reset(self, email: str) -> None:
        try:
            self._identity.send_password_reset(email)
            logger.info("Password reset requested")
        except PortalError as e:
            # Same response either way so callers cannot tell which emails have accounts
            logger.warning("Password reset request failed: %s", e.message)

    async def get_profile(self, context: AuthContext) -> UserProfile:
        record = self._users.get(context.identity_id)
        if record is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")
        return merge_profile(context.email, context.email_verified, record)

    async def update_profile(
        self,
        context: AuthContext,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        fields = drop_unset(request.model_dump(exclude_unset=True))
        if request.display_name or request.phone_number:
            self._identity.update_user(
                context.identity_id,
                display_name=request.display_name,
                phone=request.phone_number,
            )

        record = self._users.update(context.identity_id, fields)
        if record is None:
            raise NotFoundError("User not found", code="USER_NOT_FOUND")

        logger.info("User profile updated: %s", context.identity_id)
        return merge_profile(context.email, context.email_verified, record)

    async def change_password(
        self,
        context: AuthContext,
        request: ChangePasswordRequest,
    ) -> None:
        self._identity.update_user(context.identity_id, password=request.new_password)
        logger.info("Password changed for user: %s", context.identity_id)
