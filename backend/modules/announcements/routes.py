"""
Announcement API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_announcement_service, get_list_params
from api.middleware.auth import get_auth_context, require_admin, require_authenticated
from shared.models import AuthContext, ListParams
from shared.responses import ApiResponse

from .interfaces import IAnnouncementService
from .models import (
    Announcement,
    AnnouncementCategory,
    AnnouncementListResponse,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)

router = APIRouter(dependencies=[Depends(require_authenticated)])


@router.get("", response_model=ApiResponse[AnnouncementListResponse])
async def list_announcements(
    category: Optional[AnnouncementCategory] = Query(default=None, description="Filter by category"),
    params: ListParams = Depends(get_list_params),
    context: AuthContext = Depends(get_auth_context),
    service: IAnnouncementService = Depends(get_announcement_service),
) -> ApiResponse[AnnouncementListResponse]:
    """List announcements, newest first."""
    result = await service.list_announcements(context, params, category)
    return ApiResponse(message="Announcements retrieved successfully", data=result)


@router.get("/{announcement_id}", response_model=ApiResponse[Announcement])
async def get_announcement(
    announcement_id: str,
    context: AuthContext = Depends(get_auth_context),
    service: IAnnouncementService = Depends(get_announcement_service),
) -> ApiResponse[Announcement]:
    announcement = await service.get_announcement(context, announcement_id)
    return ApiResponse(message="Announcement retrieved successfully", data=announcement)


@router.post("", response_model=ApiResponse[Announcement], status_code=201)
async def create_announcement(
    request: CreateAnnouncementRequest,
    context: AuthContext = Depends(require_admin),
    service: IAnnouncementService = Depends(get_announcement_service),
) -> ApiResponse[Announcement]:
    announcement = await service.create_announcement(context, request)
    return ApiResponse(message="Announcement created successfully", data=announcement)


@router.put("/{announcement_id}", response_model=ApiResponse[Announcement])
async def update_announcement(
    announcement_id: str,
    request: UpdateAnnouncementRequest,
    _: AuthContext = Depends(require_admin),
    service: IAnnouncementService = Depends(get_announcement_service),
) -> ApiResponse[Announcement]:
    announcement = await service.update_announcement(announcement_id, request)
    return ApiResponse(message="Announcement updated successfully", data=announcement)


@router.delete("/{announcement_id}", response_model=ApiResponse[None])
async def delete_announcement(
    announcement_id: str,
    _: AuthContext = Depends(require_admin),
    service: IAnnouncementService = Depends(get_announcement_service),
) -> ApiResponse[None]:
    await service.delete_announcement(announcement_id)
    return ApiResponse(message="Announcement deleted successfully")
