"""
Events module interface.

The API layer depends on IEventService for all event operations.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthContext, ListParams

from .models import CreateEventRequest, Event, EventListResponse, UpdateEventRequest


@runtime_checkable
class IEventService(Protocol):
    """
    Interface for event operations.

    Role checks happen in the route gates; this service trusts that
    write methods are only reached by admins.
    """

    async def list_events(
        self,
        params: ListParams,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> EventListResponse:
        """
        List events ordered by start date, earliest first.

        Args:
            params: Page and page size
            start_date: Only events starting at or after this time
            end_date: Only events starting at or before this time
        """
        ...

    async def get_event(self, event_id: str) -> Event:
        """
        Raises:
            EventNotFoundError: If the event doesn't exist
        """
        ...

    async def create_event(self, context: AuthContext, request: CreateEventRequest) -> Event:
        ...

    async def update_event(self, event_id: str, request: UpdateEventRequest) -> Event:
        """
        Merge the given fields into the event.

        Raises:
            EventNotFoundError: If the event doesn't exist
            InvalidEventScheduleError: If the merged end precedes the start
        """
        ...

    async def delete_event(self, event_id: str) -> None:
        ...

    async def rsvp(self, event_id: str, context: AuthContext) -> Event:
        """
        Add the caller to the attendee set.

        Raises:
            EventNotFoundError: If the event doesn't exist
            AlreadyRsvpedError: If the caller already attends
            EventFullError: If max_attendees has been reached
        """
        ...

    async def cancel_rsvp(self, event_id: str, context: AuthContext) -> Event:
        """
        Remove the caller from the attendee set.

        Raises:
            EventNotFoundError: If the event doesn't exist
            NotRsvpedError: If the caller was not attending
        """
        ...
