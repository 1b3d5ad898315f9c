"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container is built once at startup (see api.app.create_app) and
stored on app.state. Which store and identity provider back it is decided
here from Settings.backend and nowhere else.
"""

import logging
from functools import partial
from typing import TYPE_CHECKING, Optional

from fastapi import Query, Request

from shared.config import Settings
from shared.models import ListParams

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.store import IDocumentStore
    from modules.auth.identity import IIdentityProvider
    from modules.auth.interfaces import IAuthService
    from modules.users.store import IUserStore
    from modules.events.interfaces import IEventService
    from modules.documents.interfaces import IDocumentService
    from modules.gallery.interfaces import IGalleryService
    from modules.announcements.interfaces import IAnnouncementService
    from modules.residents.interfaces import IResidentService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access and cached
    as singletons within the container.

    Tests build a container around in-memory collaborators and hand it to
    create_app(); nothing in the request path reaches for module globals.
    """

    def __init__(
        self,
        settings: Settings,
        store: "Optional[IDocumentStore]" = None,
        identity: "Optional[IIdentityProvider]" = None,
    ) -> None:
        self.settings = settings
        self._store = store
        self._identity = identity
        self._users: "IUserStore | None" = None
        self._auth_service: "IAuthService | None" = None
        self._event_service: "IEventService | None" = None
        self._document_service: "IDocumentService | None" = None
        self._gallery_service: "IGalleryService | None" = None
        self._announcement_service: "IAnnouncementService | None" = None
        self._resident_service: "IResidentService | None" = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContainer":
        """Build the backend pair selected by configuration."""
        if settings.backend == "memory":
            from shared.store import InMemoryDocumentStore
            from modules.auth.identity import InMemoryIdentityProvider

            logger.info("Using in-memory store and identity provider")
            return cls(
                settings,
                store=InMemoryDocumentStore(),
                identity=InMemoryIdentityProvider(settings.supabase_jwt_secret or None),
            )

        from shared.database import create_supabase_client, create_supabase_anon_client
        from shared.store import SupabaseDocumentStore
        from modules.auth.identity import SupabaseIdentityProvider

        admin_client = create_supabase_client(settings)
        logger.info("Using Supabase store and identity provider")
        return cls(
            settings,
            store=SupabaseDocumentStore(admin_client),
            identity=SupabaseIdentityProvider(
                admin_client,
                partial(create_supabase_anon_client, settings),
                settings.supabase_jwt_secret,
            ),
        )

    @property
    def store(self) -> "IDocumentStore":
        if self._store is None:
            raise RuntimeError("Document store not configured")
        return self._store

    @property
    def identity(self) -> "IIdentityProvider":
        if self._identity is None:
            raise RuntimeError("Identity provider not configured")
        return self._identity

    @property
    def users(self) -> "IUserStore":
        """Get the user store instance."""
        if self._users is None:
            from modules.users.store import UserStore
            self._users = UserStore(self.store)
        return self._users

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.identity, self.users, self.settings)
        return self._auth_service

    @property
    def events(self) -> "IEventService":
        """Get the event service instance."""
        if self._event_service is None:
            from modules.events.service import EventService
            self._event_service = EventService(self.store)
        return self._event_service

    @property
    def documents(self) -> "IDocumentService":
        """Get the document service instance."""
        if self._document_service is None:
            from modules.documents.service import DocumentService
            self._document_service = DocumentService(self.store, self.settings)
        return self._document_service

    @property
    def gallery(self) -> "IGalleryService":
        """Get the gallery service instance."""
        if self._gallery_service is None:
            from modules.gallery.service import GalleryService
            self._gallery_service = GalleryService(self.store)
        return self._gallery_service

    @property
    def announcements(self) -> "IAnnouncementService":
        """Get the announcement service instance."""
        if self._announcement_service is None:
            from modules.announcements.service import AnnouncementService
            self._announcement_service = AnnouncementService(self.store)
        return self._announcement_service

    @property
    def residents(self) -> "IResidentService":
        """Get the resident service instance."""
        if self._resident_service is None:
            from modules.residents.service import ResidentService
            self._resident_service = ResidentService(self.users)
        return self._resident_service

    def close(self) -> None:
        """
        Drop cached services.

        Called on application shutdown. The Supabase client holds no
        long-lived connections of its own, so releasing references is enough.
        """
        self._users = None
        self._auth_service = None
        self._event_service = None
        self._document_service = None
        self._gallery_service = None
        self._announcement_service = None
        self._resident_service = None


def get_container(request: Request) -> ServiceContainer:
    """Get the container the running app was built with."""
    return request.app.state.container


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_settings_dependency(request: Request) -> Settings:
    """FastAPI dependency for the app's settings."""
    return get_container(request).settings


def get_list_params(
    request: Request,
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    limit: Optional[int] = Query(default=None, ge=1, description="Items per page"),
) -> ListParams:
    """
    FastAPI dependency for page/limit query parameters.

    A missing limit falls back to the configured default page size and
    anything above the configured maximum is clamped.
    """
    settings = get_container(request).settings
    if limit is None:
        limit = settings.default_page_size
    return ListParams(page=page, limit=min(limit, settings.max_page_size))


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_event_service(request: Request) -> "IEventService":
    """FastAPI dependency for event service."""
    return get_container(request).events


def get_document_service(request: Request) -> "IDocumentService":
    """FastAPI dependency for document service."""
    return get_container(request).documents


def get_gallery_service(request: Request) -> "IGalleryService":
    """FastAPI dependency for gallery service."""
    return get_container(request).gallery


def get_announcement_service(request: Request) -> "IAnnouncementService":
    """FastAPI dependency for announcement service."""
    return get_container(request).announcements


def get_resident_service(request: Request) -> "IResidentService":
    """FastAPI dependency for resident service."""
    return get_container(request).residents
