"""
HTTP client for the Residence Portal API.

A thin wrapper over httpx.AsyncClient that attaches the bearer token and
unwraps the response envelope. Failures of any kind surface as
PortalAPIError so callers only handle one exception type.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError

from modules.auth.models import UserProfile
from modules.events.models import Event

logger = logging.getLogger(__name__)


class PortalAPIError(Exception):
    """An error envelope (or transport failure) returned to the client."""

    def __init__(
        self,
        status: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status = status
        self.message = message
        self.code = code
        self.details = details or {}

    @property
    def is_auth_error(self) -> bool:
        return self.status in (401, 403)

    def __repr__(self) -> str:
        return f"PortalAPIError(status={self.status}, code={self.code!r}, message={self.message!r})"


class PortalClient:
    """
    Async client for the portal API.

    Example:
        async with PortalClient("https://portal.example.com") as client:
            me = await client.get_me(token)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            base_url: API origin, without the /api suffix
            timeout: Request timeout in seconds
            transport: Custom transport (tests pass httpx.MockTransport)
        """
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        model: Optional[type[BaseModel]] = None,
    ) -> Any:
        """
        Send one request and return the envelope's data.

        If `model` is given the data is validated into it.

        Raises:
            PortalAPIError: On an error envelope, a non-JSON body, data that
                does not fit `model`, or a transport failure (status 0)
        """
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise PortalAPIError(0, "Network error", "NETWORK_ERROR") from e

        try:
            body = response.json()
        except ValueError as e:
            raise PortalAPIError(response.status_code, "Unexpected response from server", "BAD_RESPONSE") from e

        if not isinstance(body, dict) or not body.get("success", False) or response.is_error:
            error = body.get("error") if isinstance(body, dict) else None
            error = error if isinstance(error, dict) else {}
            message = body.get("message", "Request failed") if isinstance(body, dict) else "Request failed"
            raise PortalAPIError(response.status_code, message, error.get("code"), error.get("details"))

        data = body.get("data")
        if model is None:
            return data
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("%s %s returned an unexpected payload: %s", method, path, e)
            raise PortalAPIError(response.status_code, "Unexpected response from server", "BAD_RESPONSE") from e

    # ------------------------------------------------------------------
    # Typed helpers
    # ------------------------------------------------------------------

    async def get_me(self, token: str) -> UserProfile:
        return await self.request("GET", "/api/auth/me", token, model=UserProfile)

    async def update_me(self, token: str, fields: dict[str, Any]) -> UserProfile:
        return await self.request("PUT", "/api/auth/me", token, json=fields, model=UserProfile)

    async def list_events(self, token: str, **params: Any) -> dict[str, Any]:
        return await self.request("GET", "/api/events", token, params=params or None)

    async def rsvp(self, token: str, event_id: str) -> Event:
        return await self.request("POST", f"/api/events/{event_id}/rsvp", token, model=Event)

    async def cancel_rsvp(self, token: str, event_id: str) -> Event:
        return await self.request("DELETE", f"/api/events/{event_id}/rsvp", token, model=Event)
