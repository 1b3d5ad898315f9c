"""
Event repository for database access.

Encapsulates the "events" collection, including the atomic attendee-set
updates used by RSVP.
"""

from typing import Any

from shared.repository import BaseRepository
from shared.store import SetUpdate

from .models import Event

EVENTS_COLLECTION = "events"


class EventRepository(BaseRepository[Event]):
    """
    Repository for event data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for verifying roles.
    """

    collection = EVENTS_COLLECTION

    def _map(self, row: dict[str, Any]) -> Event:
        data = dict(row)
        data["attendees"] = list(data.get("attendees") or [])
        return Event.model_validate(data)

    def add_attendee(self, event_id: str, user_id: str) -> SetUpdate:
        """Add user_id to attendees unless present or at max_attendees, in one atomic step."""
        return self._store.add_to_set(
            self.collection,
            event_id,
            "attendees",
            user_id,
            capacity_field="max_attendees",
        )

    def remove_attendee(self, event_id: str, user_id: str) -> SetUpdate:
        return self._store.remove_from_set(self.collection, event_id, "attendees", user_id)
