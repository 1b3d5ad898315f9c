"""
Events module.

Handles community events and RSVPs.

Public API:
- IEventService: Interface for event operations
- Event: A community event with its attendee set
- CreateEventRequest / UpdateEventRequest: Admin write payloads
"""

from .interfaces import IEventService
from .models import (
    Event,
    EventListResponse,
    CreateEventRequest,
    UpdateEventRequest,
)
from .exceptions import (
    EventNotFoundError,
    AlreadyRsvpedError,
    NotRsvpedError,
    EventFullError,
    InvalidEventScheduleError,
    CapacityBelowAttendeesError,
)

__all__ = [
    # Interface
    "IEventService",
    # Models
    "Event",
    "EventListResponse",
    "CreateEventRequest",
    "UpdateEventRequest",
    # Exceptions
    "EventNotFoundError",
    "AlreadyRsvpedError",
    "NotRsvpedError",
    "EventFullError",
    "InvalidEventScheduleError",
    "CapacityBelowAttendeesError",
]
