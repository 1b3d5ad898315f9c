"""
Events module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str):
        super().__init__(
            "Event not found",
            code="EVENT_NOT_FOUND",
            details={"event_id": event_id},
        )


class AlreadyRsvpedError(ValidationError):
    """Raised when a user RSVPs twice to the same event."""

    def __init__(self, event_id: str):
        super().__init__(
            "You have already RSVP'd to this event",
            code="ALREADY_RSVPED",
            details={"event_id": event_id},
        )


class NotRsvpedError(ValidationError):
    """Raised when cancelling an RSVP that does not exist."""

    def __init__(self, event_id: str):
        super().__init__(
            "You have not RSVP'd to this event",
            code="NOT_RSVPED",
            details={"event_id": event_id},
        )


class EventFullError(ValidationError):
    """Raised when an event has no RSVP capacity left."""

    def __init__(self, event_id: str, max_attendees: int | None = None):
        super().__init__(
            "Event has reached maximum attendees.",
            code="EVENT_FULL",
            details={"event_id": event_id, "max_attendees": max_attendees},
        )


class InvalidEventScheduleError(ValidationError):
    """Raised when an event would end before it starts."""

    def __init__(self, event_id: str):
        super().__init__(
            "endDate must not be before date",
            code="INVALID_SCHEDULE",
            details={"event_id": event_id},
        )


class CapacityBelowAttendeesError(ValidationError):
    """Raised when lowering capacity below the current attendee count."""

    def __init__(self, event_id: str, attendees: int):
        super().__init__(
            "maxAttendees cannot be lower than the current number of attendees",
            code="CAPACITY_BELOW_ATTENDEES",
            details={"event_id": event_id, "attendees": attendees},
        )
