"""
Database client factory for Supabase.

Provides the service-role client used by the document store and the
identity provider. The client is created once at startup by the service
container and passed to whatever needs it; there is no module-level cache.
"""

from supabase import create_client, Client
from supabase.client import ClientOptions

from .config import Settings


def create_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client with service role (bypasses RLS).

    Authorization is enforced by the API's own role checks, so the backend
    needs full database access and the Auth admin API.

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase settings are missing
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set PORTAL_SUPABASE_URL and PORTAL_SUPABASE_SERVICE_ROLE_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )


def create_supabase_anon_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the anon key.

    Used for end-user password sign-in, which must not run with the
    service role. The session a sign-in produces is not persisted and
    never auto-refreshed, and callers build one client per request.
    """
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set PORTAL_SUPABASE_URL and PORTAL_SUPABASE_ANON_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )
