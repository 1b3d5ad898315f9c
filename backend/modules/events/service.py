"""
Events service implementation.

Event CRUD plus RSVP. RSVP never reads-then-writes the attendee list:
membership and capacity are checked by the store in the same atomic step
that adds the attendee.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from shared.models import AuthContext, ListParams, Pagination, drop_unset, iso
from shared.store import Filter, IDocumentStore, SetUpdate

from .exceptions import (
    AlreadyRsvpedError,
    CapacityBelowAttendeesError,
    EventFullError,
    EventNotFoundError,
    InvalidEventScheduleError,
    NotRsvpedError,
)
from .interfaces import IEventService
from .models import CreateEventRequest, Event, EventListResponse, UpdateEventRequest
from .repository import EventRepository

logger = logging.getLogger(__name__)

# Columns an update may set back to null.
CLEARABLE_FIELDS = {"end_date", "max_attendees", "image"}


class EventService(IEventService):
    """Event service backed by the document store."""

    def __init__(self, store: IDocumentStore):
        self._events = EventRepository(store)

    async def list_events(
        self,
        params: ListParams,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> EventListResponse:
        filters: list[Filter] = []
        if start_date is not None:
            filters.append(Filter(field="date", op="gte", value=iso(start_date)))
        if end_date is not None:
            filters.append(Filter(field="date", op="lte", value=iso(end_date)))

        events, total = self._events.list(params, filters=filters, order_by="date")
        return EventListResponse(
            events=events,
            pagination=Pagination.build(total, params.page, params.limit),
        )

    async def get_event(self, event_id: str) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def create_event(self, context: AuthContext, request: CreateEventRequest) -> Event:
        event = self._events.create({
            "title": request.title,
            "description": request.description,
            "date": iso(request.date),
            "end_date": iso(request.end_date),
            "location": request.location,
            "max_attendees": request.max_attendees,
            "image": request.image,
            "is_public": request.is_public,
            "attendees": [],
            "created_by": context.identity_id,
        })
        logger.info("New event created: %s", event.id)
        return event

    async def update_event(self, event_id: str, request: UpdateEventRequest) -> Event:
        existing = await self.get_event(event_id)
        changes = request.model_dump(exclude_unset=True)

        start = changes.get("date") or existing.date
        end = changes["end_date"] if "end_date" in changes else existing.end_date
        if end is not None and end < start:
            raise InvalidEventScheduleError(event_id)

        capacity = changes.get("max_attendees")
        if capacity is not None and capacity < len(existing.attendees):
            raise CapacityBelowAttendeesError(event_id, len(existing.attendees))

        data: dict[str, Any] = {
            key: iso(value) if isinstance(value, datetime) else value
            for key, value in drop_unset(changes, keep_none=CLEARABLE_FIELDS).items()
        }

        updated = self._events.update(event_id, data)
        if updated is None:
            raise EventNotFoundError(event_id)
        logger.info("Event updated: %s", event_id)
        return updated

    async def delete_event(self, event_id: str) -> None:
        await self.get_event(event_id)
        if not self._events.delete(event_id):
            raise EventNotFoundError(event_id)
        logger.info("Event deleted: %s", event_id)

    async def rsvp(self, event_id: str, context: AuthContext) -> Event:
        outcome = self._events.add_attendee(event_id, context.identity_id)

        if outcome == SetUpdate.NOT_FOUND:
            raise EventNotFoundError(event_id)
        if outcome == SetUpdate.ALREADY_PRESENT:
            raise AlreadyRsvpedError(event_id)
        if outcome == SetUpdate.FULL:
            raise EventFullError(event_id)

        logger.info("User %s RSVP'd to event %s", context.identity_id, event_id)
        return await self.get_event(event_id)

    async def cancel_rsvp(self, event_id: str, context: AuthContext) -> Event:
        outcome = self._events.remove_attendee(event_id, context.identity_id)

        if outcome == SetUpdate.NOT_FOUND:
            raise EventNotFoundError(event_id)
        if outcome == SetUpdate.NOT_PRESENT:
            raise NotRsvpedError(event_id)

        logger.info("User %s canceled RSVP to event %s", context.identity_id, event_id)
        return await self.get_event(event_id)
