"""
Identity provider adapters.

The identity provider owns sign-up, sign-in, password reset and the signed
access tokens. The portal only needs a narrow slice of it, described by
IIdentityProvider. Two implementations exist:

- SupabaseIdentityProvider: Supabase Auth (GoTrue) via the admin API.
- InMemoryIdentityProvider: a process-local stand-in for tests and the
  "memory" backend. It issues real HS256 tokens, so token verification
  follows the same code path as production.

Both normalize every failure: token problems become InvalidTokenError or
ExpiredTokenError, anything else becomes IdentityProviderError. Provider
error payloads never leave this module.
"""

import hashlib
import logging
import secrets
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol, runtime_checkable

import jwt
from pydantic import ValidationError as PydanticValidationError
from supabase import AuthApiError, Client

from .exceptions import (
    EmailAlreadyExistsError,
    ExpiredTokenError,
    IdentityProviderError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from .models import JWTPayload, SignInResult, VerifiedIdentity

logger = logging.getLogger(__name__)

TOKEN_AUDIENCE = "authenticated"
TOKEN_ALGORITHM = "HS256"


@runtime_checkable
class IIdentityProvider(Protocol):
    """Interface for the external identity provider."""

    def verify_token(self, token: str) -> VerifiedIdentity:
        """
        Verify signature and expiry of an access token.

        Raises:
            InvalidTokenError / ExpiredTokenError
        """
        ...

    def create_user(
        self,
        email: str,
        password: str,
        display_name: str = "",
        phone: Optional[str] = None,
    ) -> VerifiedIdentity:
        """
        Raises:
            EmailAlreadyExistsError: If the email is taken
        """
        ...

    def sign_in(self, email: str, password: str) -> SignInResult:
        """
        Raises:
            InvalidCredentialsError: On wrong email or password
        """
        ...

    def update_user(
        self,
        user_id: str,
        display_name: Optional[str] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        ...

    def send_password_reset(self, email: str) -> None:
        ...

    def get_user_by_email(self, email: str) -> Optional[VerifiedIdentity]:
        """Look an identity up by email, case-insensitively. None if unknown."""
        ...


def decode_access_token(token: str, secret: str) -> VerifiedIdentity:
    """
    Decode and validate an HS256 access token.

    Args:
        token: The JWT token string
        secret: Shared signing secret

    Returns:
        VerifiedIdentity built from the token claims

    Raises:
        InvalidTokenError: If the token is malformed, badly signed, or
            verification is not configured
        ExpiredTokenError: If the token has expired
    """
    if not secret:
        logger.error("Token verification attempted without a JWT secret configured")
        raise InvalidTokenError("Server authentication not configured")

    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[TOKEN_ALGORITHM],
            audience=TOKEN_AUDIENCE,
            options={"require": ["exp", "sub"]},
        )
        payload = JWTPayload(**claims)
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except (jwt.InvalidTokenError, PydanticValidationError) as e:
        logger.warning("Rejected access token: %s", e)
        raise InvalidTokenError()

    metadata = payload.user_metadata or {}
    return VerifiedIdentity(
        id=payload.sub,
        email=payload.email or "",
        email_verified=bool(payload.email_confirmed_at or metadata.get("email_verified")),
        display_name=metadata.get("full_name") or metadata.get("display_name") or "",
        phone=payload.phone or None,
        role_claim=(payload.app_metadata or {}).get("role") or payload.role,
    )


def _identity_from_supabase_user(user) -> VerifiedIdentity:
    metadata = getattr(user, "user_metadata", None) or {}
    return VerifiedIdentity(
        id=str(user.id),
        email=user.email or "",
        email_verified=getattr(user, "email_confirmed_at", None) is not None,
        display_name=metadata.get("full_name") or metadata.get("display_name") or "",
        phone=getattr(user, "phone", None) or None,
        role_claim=(getattr(user, "app_metadata", None) or {}).get("role"),
    )


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Token verification is local (shared JWT secret). User management goes
    through the admin API on the service-role client. Password sign-in and
    reset emails run on a fresh anon client per call, so no end-user session
    outlives the request that created it.
    """

    # Page size for admin user listing
    LIST_PAGE_SIZE = 1000

    def __init__(
        self,
        admin_client: Client,
        public_client_factory: Callable[[], Client],
        jwt_secret: str,
    ) -> None:
        self._admin = admin_client
        self._public_client = public_client_factory
        self._jwt_secret = jwt_secret

    def verify_token(self, token: str) -> VerifiedIdentity:
        return decode_access_token(token, self._jwt_secret)

    def create_user(
        self,
        email: str,
        password: str,
        display_name: str = "",
        phone: Optional[str] = None,
    ) -> VerifiedIdentity:
        attributes = {
            "email": email,
            "password": password,
            "user_metadata": {"full_name": display_name},
        }
        if phone:
            attributes["phone"] = phone

        try:
            response = self._admin.auth.admin.create_user(attributes)
        except AuthApiError as e:
            if e.status == 422 or "already" in str(e).lower():
                raise EmailAlreadyExistsError(email)
            logger.error("Supabase create_user failed", exc_info=e)
            raise IdentityProviderError() from e
        except Exception as e:
            logger.error("Supabase create_user failed", exc_info=e)
            raise IdentityProviderError() from e

        return _identity_from_supabase_user(response.user)

    def sign_in(self, email: str, password: str) -> SignInResult:
        try:
            response = self._public_client().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as e:
            if e.status in (400, 401):
                raise InvalidCredentialsError()
            logger.error("Supabase sign_in failed", exc_info=e)
            raise IdentityProviderError() from e
        except Exception as e:
            logger.error("Supabase sign_in failed", exc_info=e)
            raise IdentityProviderError() from e

        if response.session is None or response.user is None:
            raise InvalidCredentialsError()

        return SignInResult(
            identity=_identity_from_supabase_user(response.user),
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            expires_in=response.session.expires_in,
        )

    def update_user(
        self,
        user_id: str,
        display_name: Optional[str] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        attributes: dict = {}
        if display_name:
            attributes["user_metadata"] = {"full_name": display_name}
        if phone:
            attributes["phone"] = phone
        if password:
            attributes["password"] = password
        if not attributes:
            return

        try:
            self._admin.auth.admin.update_user_by_id(user_id, attributes)
        except Exception as e:
            logger.error("Supabase update_user failed for %s", user_id, exc_info=e)
            raise IdentityProviderError() from e

    def send_password_reset(self, email: str) -> None:
        try:
            self._public_client().auth.reset_password_for_email(email)
        except Exception as e:
            logger.error("Supabase password reset failed", exc_info=e)
            raise IdentityProviderError() from e

    def get_user_by_email(self, email: str) -> Optional[VerifiedIdentity]:
        wanted = email.strip().lower()
        page = 1
        while True:
            try:
                users = self._admin.auth.admin.list_users(page=page, per_page=self.LIST_PAGE_SIZE)
            except Exception as e:
                logger.error("Supabase list_users failed", exc_info=e)
                raise IdentityProviderError() from e

            for user in users:
                if (user.email or "").lower() == wanted:
                    return _identity_from_supabase_user(user)
            if len(users) < self.LIST_PAGE_SIZE:
                return None
            page += 1


class InMemoryIdentityProvider(IIdentityProvider):
    """
    Process-local identity provider.

    Users and salted password hashes live in a dict. Issued tokens are
    genuine HS256 JWTs signed with `jwt_secret`.
    """

    def __init__(self, jwt_secret: Optional[str] = None, token_ttl: int = 3600) -> None:
        self._jwt_secret = jwt_secret or secrets.token_urlsafe(32)
        self._token_ttl = token_ttl
        self._users: dict[str, dict] = {}
        self._by_email: dict[str, str] = {}
        self._lock = threading.Lock()
        self.reset_requests: list[str] = []

    @staticmethod
    def _hash(password: str, salt: str) -> str:
        return hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), 100_000).hex()

    def issue_token(self, user_id: str, ttl: Optional[int] = None, **claims) -> str:
        """Mint an access token for a known user (or any id, for tests)."""
        user = self._users.get(user_id, {})
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": user.get("email", claims.pop("email", "")),
            "aud": TOKEN_AUDIENCE,
            "role": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=ttl if ttl is not None else self._token_ttl)).timestamp()),
            "user_metadata": {"full_name": user.get("display_name", "")},
            **claims,
        }
        return jwt.encode(payload, self._jwt_secret, algorithm=TOKEN_ALGORITHM)

    def _identity(self, user_id: str) -> VerifiedIdentity:
        user = self._users[user_id]
        return VerifiedIdentity(
            id=user_id,
            email=user["email"],
            email_verified=user["email_verified"],
            display_name=user["display_name"],
            phone=user["phone"],
        )

    def verify_token(self, token: str) -> VerifiedIdentity:
        return decode_access_token(token, self._jwt_secret)

    def create_user(
        self,
        email: str,
        password: str,
        display_name: str = "",
        phone: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> VerifiedIdentity:
        key = email.lower()
        with self._lock:
            if key in self._by_email:
                raise EmailAlreadyExistsError(email)
            uid = user_id or str(uuid.uuid4())
            salt = secrets.token_hex(8)
            self._users[uid] = {
                "email": email,
                "salt": salt,
                "password_hash": self._hash(password, salt),
                "display_name": display_name,
                "phone": phone,
                "email_verified": False,
            }
            self._by_email[key] = uid
            return self._identity(uid)

    def sign_in(self, email: str, password: str) -> SignInResult:
        uid = self._by_email.get(email.lower())
        if uid is None:
            raise InvalidCredentialsError()
        user = self._users[uid]
        if self._hash(password, user["salt"]) != user["password_hash"]:
            raise InvalidCredentialsError()
        return SignInResult(
            identity=self._identity(uid),
            access_token=self.issue_token(uid),
            expires_in=self._token_ttl,
        )

    def update_user(
        self,
        user_id: str,
        display_name: Optional[str] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise IdentityProviderError(f"Unknown identity: {user_id}")
            if display_name:
                user["display_name"] = display_name
            if phone:
                user["phone"] = phone
            if password:
                user["salt"] = secrets.token_hex(8)
                user["password_hash"] = self._hash(password, user["salt"])

    def send_password_reset(self, email: str) -> None:
        self.reset_requests.append(email)

    def get_user_by_email(self, email: str) -> Optional[VerifiedIdentity]:
        uid = self._by_email.get(email.strip().lower())
        return self._identity(uid) if uid is not None else None
