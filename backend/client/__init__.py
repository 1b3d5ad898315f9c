"""
Python client for the Residence Portal API.

Public API:
- PortalClient / PortalAPIError: envelope-aware HTTP client
- SessionBridge / SessionState: client session state machine
- IProviderSession / ProviderProfile: what an identity provider session must offer
"""

from .api import PortalClient, PortalAPIError
from .session import (
    SessionBridge,
    SessionState,
    IProviderSession,
    ProviderProfile,
    ProviderSessionError,
    merge_user,
)

__all__ = [
    "PortalClient",
    "PortalAPIError",
    "SessionBridge",
    "SessionState",
    "IProviderSession",
    "ProviderProfile",
    "ProviderSessionError",
    "merge_user",
]
