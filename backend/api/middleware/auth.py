"""
Authorization gates.

Two composable FastAPI dependencies:

- require_authenticated: verifies the bearer token, resolves the role from
  the user record and stores the AuthContext on request.state.
- require_admin: reads that context and demands an admin role. It never
  authenticates by itself, so using it without require_authenticated
  fails closed with 401.

Usage:
    router = APIRouter(dependencies=[Depends(require_authenticated)])

    @router.post("")
    async def create(ctx: AuthContext = Depends(require_admin)):
        ...
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthorizationError
from shared.models import AuthContext
from modules.auth.exceptions import AdminRequiredError, MissingTokenError
from modules.auth.interfaces import IAuthService

from ..dependencies import get_auth_service

logger = logging.getLogger(__name__)

# Bearer token extractor. auto_error is off so a missing header becomes our
# own 401 envelope instead of FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)


async def require_authenticated(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Dependency that requires authentication.

    Runs on every request: the token is re-verified and the role re-read,
    nothing is cached between requests.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        logger.warning("Rejected %s %s: missing bearer token", request.method, request.url.path)
        raise MissingTokenError("Access denied. No token provided.")

    context = await auth.authenticate(credentials.credentials)
    request.state.auth = context
    return context


def get_auth_context(request: Request) -> AuthContext:
    """
    Return the context attached by require_authenticated.

    Raises:
        MissingTokenError: If no authenticated context is attached
    """
    context = getattr(request.state, "auth", None)
    if not isinstance(context, AuthContext):
        raise MissingTokenError("Access denied. Authentication required.")
    return context


async def require_admin(request: Request) -> AuthContext:
    """Dependency that requires an admin or super_admin role."""
    context = get_auth_context(request)
    if not context.is_admin:
        logger.warning(
            "User %s (%s) attempted to access admin-only resource %s %s",
            context.identity_id, context.role.value, request.method, request.url.path,
        )
        raise AdminRequiredError(context.role.value)
    return context


def ensure_owner_or_admin(context: AuthContext, owner_id: str, action: str = "access") -> None:
    """
    Allow the owner of a resource, or an admin.

    Raises:
        AuthorizationError: If the caller is neither
    """
    if context.identity_id == owner_id or context.is_admin:
        return
    raise AuthorizationError(
        f"Not authorized to {action} this resource",
        code="NOT_OWNER",
        details={"owner_id": owner_id},
    )


# Type aliases for cleaner route definitions
RequireAuth = Depends(require_authenticated)
RequireAdmin = Depends(require_admin)
CurrentContext = Depends(get_auth_context)
