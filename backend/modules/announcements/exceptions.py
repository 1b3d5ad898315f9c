"""
Announcements module exceptions.
"""

from shared.exceptions import NotFoundError


class AnnouncementNotFoundError(NotFoundError):
    """Raised when an announcement is not found or not visible to the caller."""

    def __init__(self, announcement_id: str):
        super().__init__(
            "Announcement not found",
            code="ANNOUNCEMENT_NOT_FOUND",
            details={"announcement_id": announcement_id},
        )
