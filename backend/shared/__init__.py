"""
Shared infrastructure for the Residence Portal backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- store: Document store capability (Supabase and in-memory)
- repository: Base repository over a document store
- exceptions: Base exception classes
- responses: Uniform response envelope

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    PortalError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from .models import AuthContext, Role, ADMIN_ROLES
from .responses import ApiResponse, ErrorEnvelope
from .store import IDocumentStore, InMemoryDocumentStore, SupabaseDocumentStore

__all__ = [
    "Settings",
    "get_settings",
    "PortalError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "AuthContext",
    "Role",
    "ADMIN_ROLES",
    "ApiResponse",
    "ErrorEnvelope",
    "IDocumentStore",
    "InMemoryDocumentStore",
    "SupabaseDocumentStore",
]
