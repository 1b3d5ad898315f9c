"""Tests for modules/announcements/service.py."""

from datetime import datetime, timezone

import pytest

from modules.announcements.exceptions import AnnouncementNotFoundError
from modules.announcements.models import (
    Announcement,
    AnnouncementCategory,
    AnnouncementPriority,
    AnnouncementStatus,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)
from modules.announcements.service import AnnouncementService
from shared.models import ListParams, Role
from shared.store import InMemoryDocumentStore
from tests.conftest import context_for

ADMIN = context_for("admin-1", Role.ADMIN)
RESIDENT = context_for("resident-1")


def announcement_request(**overrides) -> CreateAnnouncementRequest:
    values = {
        "title": "Water shutoff",
        "content": "Maintenance on Tuesday",
        "category": "maintenance",
        **overrides,
    }
    return CreateAnnouncementRequest.model_validate(values)


@pytest.fixture
def service() -> AnnouncementService:
    return AnnouncementService(InMemoryDocumentStore())


class TestAnnouncementVisibility:
    def test_active_without_expiry_is_visible(self):
        announcement = Announcement(id="a1", title="t", content="c", category=AnnouncementCategory.GENERAL)
        assert announcement.is_visible() is True

    def test_expired_is_hidden(self):
        announcement = Announcement(
            id="a1", title="t", content="c", category=AnnouncementCategory.GENERAL,
            expires_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
        )
        assert announcement.is_visible() is False

    def test_archived_is_hidden(self):
        announcement = Announcement(
            id="a1", title="t", content="c", category=AnnouncementCategory.GENERAL,
            status=AnnouncementStatus.ARCHIVED,
        )
        assert announcement.is_visible() is False


class TestAnnouncementService:
    @pytest.mark.asyncio
    async def test_create_defaults(self, service):
        announcement = await service.create_announcement(ADMIN, announcement_request())
        assert announcement.status == AnnouncementStatus.ACTIVE
        assert announcement.priority == AnnouncementPriority.NORMAL
        assert announcement.created_by == "admin-1"

    @pytest.mark.asyncio
    async def test_residents_see_only_visible(self, service):
        await service.create_announcement(ADMIN, announcement_request(title="Current"))
        await service.create_announcement(ADMIN, announcement_request(title="Future expiry", expiresAt="2099-01-01T00:00:00Z"))
        await service.create_announcement(ADMIN, announcement_request(title="Expired", expiresAt="2020-01-01T00:00:00Z"))
        archived = await service.create_announcement(ADMIN, announcement_request(title="Archived"))
        await service.update_announcement(archived.id, UpdateAnnouncementRequest(status=AnnouncementStatus.ARCHIVED))

        resident_view = await service.list_announcements(RESIDENT, ListParams())
        admin_view = await service.list_announcements(ADMIN, ListParams())

        assert sorted(a.title for a in resident_view.announcements) == ["Current", "Future expiry"]
        assert admin_view.pagination.total == 4

    @pytest.mark.asyncio
    async def test_filter_by_category(self, service):
        await service.create_announcement(ADMIN, announcement_request())
        await service.create_announcement(ADMIN, announcement_request(category="security"))

        result = await service.list_announcements(RESIDENT, ListParams(), category=AnnouncementCategory.SECURITY)

        assert [a.category for a in result.announcements] == [AnnouncementCategory.SECURITY]

    @pytest.mark.asyncio
    async def test_hidden_announcement_not_found_for_residents(self, service):
        expired = await service.create_announcement(ADMIN, announcement_request(expiresAt="2020-01-01T00:00:00Z"))

        with pytest.raises(AnnouncementNotFoundError):
            await service.get_announcement(RESIDENT, expired.id)
        assert (await service.get_announcement(ADMIN, expired.id)).id == expired.id

    @pytest.mark.asyncio
    async def test_update_can_clear_expiry(self, service):
        announcement = await service.create_announcement(ADMIN, announcement_request(expiresAt="2020-01-01T00:00:00Z"))

        updated = await service.update_announcement(
            announcement.id,
            UpdateAnnouncementRequest.model_validate({"expiresAt": None, "priority": "high"}),
        )

        assert updated.expires_at is None
        assert updated.priority == AnnouncementPriority.HIGH
        assert updated.title == "Water shutoff"

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        with pytest.raises(AnnouncementNotFoundError):
            await service.update_announcement("nope", UpdateAnnouncementRequest(title="x"))

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(AnnouncementNotFoundError):
            await service.delete_announcement("nope")
