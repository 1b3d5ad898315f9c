"""
Announcements service implementation.
"""

import logging
from typing import Any, Optional

from shared.models import AuthContext, ListParams, Pagination, iso
from shared.repository import BaseRepository
from shared.store import Filter, IDocumentStore, now_iso

from .exceptions import AnnouncementNotFoundError
from .interfaces import IAnnouncementService
from .models import (
    Announcement,
    AnnouncementCategory,
    AnnouncementListResponse,
    AnnouncementStatus,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)

logger = logging.getLogger(__name__)


class AnnouncementRepository(BaseRepository[Announcement]):
    collection = "announcements"

    def _map(self, row: dict[str, Any]) -> Announcement:
        return Announcement.model_validate(row)


class AnnouncementService(IAnnouncementService):
    """Announcement service backed by the document store."""

    def __init__(self, store: IDocumentStore):
        self._announcements = AnnouncementRepository(store)

    async def list_announcements(
        self,
        context: AuthContext,
        params: ListParams,
        category: Optional[AnnouncementCategory] = None,
    ) -> AnnouncementListResponse:
        filters: list[Filter] = []
        if category is not None:
            filters.append(Filter(field="category", value=category.value))
        if not context.is_admin:
            filters.append(Filter(field="status", value=AnnouncementStatus.ACTIVE.value))
            filters.append(Filter(field="expires_at", op="gt_or_null", value=now_iso()))

        announcements, total = self._announcements.list(
            params, filters=filters, order_by="created_at", descending=True,
        )
        return AnnouncementListResponse(
            announcements=announcements,
            pagination=Pagination.build(total, params.page, params.limit),
        )

    async def get_announcement(self, context: AuthContext, announcement_id: str) -> Announcement:
        announcement = self._announcements.get(announcement_id)
        if announcement is None or (not context.is_admin and not announcement.is_visible()):
            raise AnnouncementNotFoundError(announcement_id)
        return announcement

    async def create_announcement(
        self, context: AuthContext, request: CreateAnnouncementRequest
    ) -> Announcement:
        announcement = self._announcements.create({
            "title": request.title,
            "content": request.content,
            "category": request.category.value,
            "priority": request.priority.value,
            "expires_at": iso(request.expires_at),
            "status": AnnouncementStatus.ACTIVE.value,
            "created_by": context.identity_id,
        })
        logger.info("New announcement created: %s", announcement.id)
        return announcement

    async def update_announcement(
        self, announcement_id: str, request: UpdateAnnouncementRequest
    ) -> Announcement:
        if self._announcements.get(announcement_id) is None:
            raise AnnouncementNotFoundError(announcement_id)

        changes: dict[str, Any] = {}
        for key, value in request.model_dump(exclude_unset=True, mode="json").items():
            if value is None and key != "expires_at":
                continue
            changes[key] = value
        if request.expires_at is not None:
            changes["expires_at"] = iso(request.expires_at)

        updated = self._announcements.update(announcement_id, changes)
        if updated is None:
            raise AnnouncementNotFoundError(announcement_id)
        logger.info("Announcement updated: %s", announcement_id)
        return updated

    async def delete_announcement(self, announcement_id: str) -> None:
        if not self._announcements.delete(announcement_id):
            raise AnnouncementNotFoundError(announcement_id)
        logger.info("Announcement deleted: %s", announcement_id)
