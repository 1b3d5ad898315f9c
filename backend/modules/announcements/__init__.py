"""
Announcements module.

Notices published by the management committee, with optional expiry.
"""

from .interfaces import IAnnouncementService
from .models import (
    Announcement,
    AnnouncementCategory,
    AnnouncementPriority,
    AnnouncementStatus,
    AnnouncementListResponse,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)
from .exceptions import AnnouncementNotFoundError

__all__ = [
    "IAnnouncementService",
    "Announcement",
    "AnnouncementCategory",
    "AnnouncementPriority",
    "AnnouncementStatus",
    "AnnouncementListResponse",
    "CreateAnnouncementRequest",
    "UpdateAnnouncementRequest",
    "AnnouncementNotFoundError",
]
