"""
Announcements module data models.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import Field, field_validator

from shared.models import CamelModel, Pagination, as_utc


class AnnouncementCategory(str, Enum):
    GENERAL = "general"
    EMERGENCY = "emergency"
    MAINTENANCE = "maintenance"
    EVENTS = "events"
    SECURITY = "security"


class AnnouncementPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    MEDIUM = "medium"
    HIGH = "high"


class AnnouncementStatus(str, Enum):
    """Only active announcements are shown to residents."""

    ACTIVE = "active"
    ARCHIVED = "archived"


class CreateAnnouncementRequest(CamelModel):
    """Request to publish an announcement."""

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=20000)
    category: AnnouncementCategory
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    expires_at: Optional[datetime] = None

    @field_validator("expires_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class UpdateAnnouncementRequest(CamelModel):
    """Partial announcement update."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=20000)
    category: Optional[AnnouncementCategory] = None
    priority: Optional[AnnouncementPriority] = None
    expires_at: Optional[datetime] = None
    status: Optional[AnnouncementStatus] = None

    @field_validator("expires_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Announcement(CamelModel):
    """A community announcement."""

    id: str
    title: str
    content: str
    category: AnnouncementCategory
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    status: AnnouncementStatus = AnnouncementStatus.ACTIVE
    expires_at: Optional[datetime] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_visible(self, now: Optional[datetime] = None) -> bool:
        """Active and not yet expired."""
        if self.status != AnnouncementStatus.ACTIVE:
            return False
        if self.expires_at is None:
            return True
        return as_utc(self.expires_at) > (now or datetime.now(timezone.utc))


class AnnouncementListResponse(CamelModel):
    """Paginated list of announcements."""

    announcements: list[Announcement]
    pagination: Pagination
