"""
Events module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator, model_validator

from shared.models import CamelModel, Pagination, as_utc


class CreateEventRequest(CamelModel):
    """Request to create a new event."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=10000)
    date: datetime = Field(..., description="Start time (naive values are UTC)")
    end_date: Optional[datetime] = Field(None, description="End time")
    location: str = Field(..., min_length=1, max_length=500)
    max_attendees: Optional[int] = Field(None, ge=1, description="RSVP capacity, unlimited if omitted")
    image: Optional[str] = None
    is_public: bool = True

    @field_validator("date", "end_date")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @model_validator(mode="after")
    def _end_after_start(self) -> "CreateEventRequest":
        if self.end_date is not None and self.end_date < self.date:
            raise ValueError("endDate must not be before date")
        return self


class UpdateEventRequest(CamelModel):
    """
    Partial event update.

    Omitted fields are left as they are. The schedule check runs in the
    service against the merged event.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=10000)
    date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=500)
    max_attendees: Optional[int] = Field(None, ge=1)
    image: Optional[str] = None
    is_public: Optional[bool] = None

    @field_validator("date", "end_date")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Event(CamelModel):
    """A community event."""

    id: str
    title: str
    description: str = ""
    date: datetime
    end_date: Optional[datetime] = None
    location: str = ""
    max_attendees: Optional[int] = None
    image: Optional[str] = None
    is_public: bool = True
    attendees: list[str] = Field(default_factory=list)
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_full(self) -> bool:
        return self.max_attendees is not None and len(self.attendees) >= self.max_attendees


class EventListResponse(CamelModel):
    """Paginated list of events."""

    events: list[Event]
    pagination: Pagination
