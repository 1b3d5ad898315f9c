"""
Client-side session bridge.

Turns identity provider session events into a portal session a UI can
render. The bridge only ever exposes a user after the application user
record has been fetched from the API and merged with the provider profile,
so nothing can act on a role before the server has stated it.

States:

    LOADING ──fetch token, fetch /auth/me──▶ AUTHENTICATED
       │                                        │  ▲
       │ failure (forced sign-out)    refresh_token│  │ok
       ▼                                        ▼  │
    ANONYMOUS ◀──sign-out / refresh failure── TOKEN_REFRESHING

Every session event bumps a generation counter. Work started for an
older generation is discarded when it completes, so a slow /auth/me from
a previous sign-in can never resurrect a user after a sign-out.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from modules.auth.models import UserProfile
from shared.models import ADMIN_ROLES

from .api import PortalAPIError, PortalClient

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"
    TOKEN_REFRESHING = "token_refreshing"


class ProviderSessionError(Exception):
    """Raised by a provider session when a token cannot be produced."""


class ProviderProfile(BaseModel):
    """Profile fields the identity provider knows about."""

    id: str
    email: str = ""
    email_verified: bool = False
    display_name: str = ""
    photo_url: Optional[str] = None


@runtime_checkable
class IProviderSession(Protocol):
    """A signed-in identity provider session."""

    async def get_token(self, force_refresh: bool = False) -> str:
        """
        Raises:
            ProviderSessionError: If the credential was revoked or expired
        """
        ...

    def profile(self) -> ProviderProfile:
        ...

    async def sign_out(self) -> None:
        ...


Listener = Callable[[SessionState, Optional[UserProfile]], Any]


def merge_user(provider: ProviderProfile, record: UserProfile) -> UserProfile:
    """Server record wins; provider fields only fill gaps."""
    return record.model_copy(update={
        "email": record.email or provider.email,
        "email_verified": provider.email_verified or record.email_verified,
        "display_name": record.display_name or provider.display_name,
        "photo_url": record.photo_url or provider.photo_url,
    })


class SessionBridge:
    """
    Client session state machine.

    Call on_session_change() from the identity provider's auth-state
    listener, with the session on sign-in and None on sign-out.
    """

    def __init__(self, client: PortalClient) -> None:
        self._client = client
        self._state = SessionState.LOADING
        self._session: Optional[IProviderSession] = None
        self._user: Optional[UserProfile] = None
        self._token: Optional[str] = None
        self._generation = 0
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_user(self) -> Optional[UserProfile]:
        """The merged user, only while AUTHENTICATED."""
        return self._user if self._state == SessionState.AUTHENTICATED else None

    @property
    def token(self) -> Optional[str]:
        return self._token if self._state == SessionState.AUTHENTICATED else None

    def can_perform_privileged_action(self) -> bool:
        user = self.current_user
        return user is not None and user.role in ADMIN_ROLES

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state transitions. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        user = self.current_user
        for listener in list(self._listeners):
            listener(state, user)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _clear(self) -> None:
        self._session = None
        self._user = None
        self._token = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def on_session_change(self, session: Optional[IProviderSession]) -> None:
        """Handle a provider sign-in (session) or sign-out (None) event."""
        self._generation += 1
        generation = self._generation

        if session is None:
            self._clear()
            self._set_state(SessionState.ANONYMOUS)
            return

        self._clear()
        self._session = session
        self._set_state(SessionState.LOADING)

        try:
            token = await session.get_token(force_refresh=True)
            if not self._is_current(generation):
                return
            record = await self._client.get_me(token)
        except (ProviderSessionError, PortalAPIError) as e:
            if self._is_current(generation):
                logger.warning("Session load failed, signing out: %s", e)
                await self._force_sign_out(session, generation)
            return
        except Exception:
            if self._is_current(generation):
                await self._force_sign_out(session, generation)
            raise

        if not self._is_current(generation):
            return

        self._token = token
        self._user = merge_user(session.profile(), record)
        self._set_state(SessionState.AUTHENTICATED)

    async def refresh_token(self) -> Optional[str]:
        """
        Force a token refresh.

        Returns the new token, or None if the session ended (refresh
        failure signs the user out).
        """
        session = self._session
        if session is None or self._state != SessionState.AUTHENTICATED:
            return None

        generation = self._generation
        self._set_state(SessionState.TOKEN_REFRESHING)
        try:
            token = await session.get_token(force_refresh=True)
        except ProviderSessionError as e:
            if self._is_current(generation):
                logger.warning("Token refresh failed, signing out: %s", e)
                await self._force_sign_out(session, generation)
            return None
        except Exception:
            if self._is_current(generation):
                await self._force_sign_out(session, generation)
            raise

        if not self._is_current(generation):
            return None
        self._token = token
        self._set_state(SessionState.AUTHENTICATED)
        return token

    async def sign_out(self) -> None:
        session = self._session
        self._generation += 1
        self._clear()
        if session is not None:
            await session.sign_out()
        self._set_state(SessionState.ANONYMOUS)

    async def _force_sign_out(self, session: IProviderSession, generation: int) -> None:
        try:
            await session.sign_out()
        except ProviderSessionError as e:
            logger.warning("Provider sign-out failed: %s", e)
        if self._is_current(generation):
            self._clear()
            self._set_state(SessionState.ANONYMOUS)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def update_profile(self, fields: dict[str, Any]) -> UserProfile:
        """
        Update the current user's profile.

        The user shown afterwards is the one the server returned, never a
        local merge of `fields`.

        Raises:
            PortalAPIError: If not signed in or the server rejects the update
        """
        token = self.token
        session = self._session
        if token is None or session is None:
            raise PortalAPIError(401, "Not signed in", "NOT_SIGNED_IN")

        generation = self._generation
        record = await self._client.update_me(token, fields)
        if self._is_current(generation) and self._state == SessionState.AUTHENTICATED:
            self._user = merge_user(session.profile(), record)
            self._set_state(SessionState.AUTHENTICATED)
        return record
