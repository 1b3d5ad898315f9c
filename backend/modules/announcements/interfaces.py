"""
Announcements module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthContext, ListParams

from .models import (
    Announcement,
    AnnouncementCategory,
    AnnouncementListResponse,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)


@runtime_checkable
class IAnnouncementService(Protocol):
    """
    Interface for announcement operations.

    Residents only see active announcements that have not expired.
    Admins see everything, including archived ones.
    """

    async def list_announcements(
        self,
        context: AuthContext,
        params: ListParams,
        category: Optional[AnnouncementCategory] = None,
    ) -> AnnouncementListResponse:
        ...

    async def get_announcement(self, context: AuthContext, announcement_id: str) -> Announcement:
        ...

    async def create_announcement(
        self, context: AuthContext, request: CreateAnnouncementRequest
    ) -> Announcement:
        ...

    async def update_announcement(
        self, announcement_id: str, request: UpdateAnnouncementRequest
    ) -> Announcement:
        ...

    async def delete_announcement(self, announcement_id: str) -> None:
        ...
