"""
Event API endpoints.

Every route requires authentication. Create, update and delete also
require an admin role; RSVP acts on the caller only.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_event_service, get_list_params
from api.middleware.auth import get_auth_context, require_admin, require_authenticated
from shared.models import AuthContext, ListParams
from shared.responses import ApiResponse

from .interfaces import IEventService
from .models import CreateEventRequest, Event, EventListResponse, UpdateEventRequest

router = APIRouter(dependencies=[Depends(require_authenticated)])


@router.get("", response_model=ApiResponse[EventListResponse])
async def list_events(
    start_date: Optional[datetime] = Query(default=None, alias="startDate"),
    end_date: Optional[datetime] = Query(default=None, alias="endDate"),
    params: ListParams = Depends(get_list_params),
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[EventListResponse]:
    """
    List events, earliest first.

    Optionally restrict to events starting within [startDate, endDate].
    """
    result = await service.list_events(params, start_date, end_date)
    return ApiResponse(message="Events retrieved successfully", data=result)


@router.get("/{event_id}", response_model=ApiResponse[Event])
async def get_event(
    event_id: str,
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[Event]:
    event = await service.get_event(event_id)
    return ApiResponse(message="Event retrieved successfully", data=event)


@router.post("", response_model=ApiResponse[Event], status_code=201)
async def create_event(
    request: CreateEventRequest,
    context: AuthContext = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[Event]:
    """Create a new event (admin only)."""
    event = await service.create_event(context, request)
    return ApiResponse(message="Event created successfully", data=event)


@router.put("/{event_id}", response_model=ApiResponse[Event])
async def update_event(
    event_id: str,
    request: UpdateEventRequest,
    _: AuthContext = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[Event]:
    """Merge the given fields into an event (admin only)."""
    event = await service.update_event(event_id, request)
    return ApiResponse(message="Event updated successfully", data=event)


@router.delete("/{event_id}", response_model=ApiResponse[None])
async def delete_event(
    event_id: str,
    _: AuthContext = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[None]:
    await service.delete_event(event_id)
    return ApiResponse(message="Event deleted successfully")


@router.post("/{event_id}/rsvp", response_model=ApiResponse[Event])
async def rsvp_to_event(
    event_id: str,
    context: AuthContext = Depends(get_auth_context),
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[Event]:
    """
    RSVP the caller to an event.

    Returns the updated event so clients can render the new attendee list
    without building it themselves.
    """
    event = await service.rsvp(event_id, context)
    return ApiResponse(message="RSVP successful", data=event)


@router.delete("/{event_id}/rsvp", response_model=ApiResponse[Event])
async def cancel_rsvp(
    event_id: str,
    context: AuthContext = Depends(get_auth_context),
    service: IEventService = Depends(get_event_service),
) -> ApiResponse[Event]:
    event = await service.cancel_rsvp(event_id, context)
    return ApiResponse(message="RSVP canceled successfully", data=event)
