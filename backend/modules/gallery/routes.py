"""
Gallery API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_gallery_service, get_list_params
from api.middleware.auth import require_admin, require_authenticated
from shared.models import AuthContext, ListParams
from shared.responses import ApiResponse

from .interfaces import IGalleryService
from .models import (
    CreateGalleryImageRequest,
    GalleryImage,
    GalleryListResponse,
    UpdateGalleryImageRequest,
)

router = APIRouter(dependencies=[Depends(require_authenticated)])


@router.get("", response_model=ApiResponse[GalleryListResponse])
async def list_gallery_images(
    category: Optional[str] = Query(default=None, description="Filter by category"),
    album: Optional[str] = Query(default=None, description="Filter by album"),
    params: ListParams = Depends(get_list_params),
    service: IGalleryService = Depends(get_gallery_service),
) -> ApiResponse[GalleryListResponse]:
    """List gallery images, newest first."""
    result = await service.list_images(params, category, album)
    return ApiResponse(message="Gallery images retrieved successfully", data=result)


@router.get("/{image_id}", response_model=ApiResponse[GalleryImage])
async def get_gallery_image(
    image_id: str,
    service: IGalleryService = Depends(get_gallery_service),
) -> ApiResponse[GalleryImage]:
    image = await service.get_image(image_id)
    return ApiResponse(message="Gallery image retrieved successfully", data=image)


@router.post("", response_model=ApiResponse[GalleryImage], status_code=201)
async def create_gallery_image(
    request: CreateGalleryImageRequest,
    context: AuthContext = Depends(require_admin),
    service: IGalleryService = Depends(get_gallery_service),
) -> ApiResponse[GalleryImage]:
    image = await service.create_image(context, request)
    return ApiResponse(message="Gallery image created successfully", data=image)


@router.put("/{image_id}", response_model=ApiResponse[GalleryImage])
async def update_gallery_image(
    image_id: str,
    request: UpdateGalleryImageRequest,
    _: AuthContext = Depends(require_admin),
    service: IGalleryService = Depends(get_gallery_service),
) -> ApiResponse[GalleryImage]:
    image = await service.update_image(image_id, request)
    return ApiResponse(message="Gallery image updated successfully", data=image)


@router.delete("/{image_id}", response_model=ApiResponse[None])
async def delete_gallery_image(
    image_id: str,
    _: AuthContext = Depends(require_admin),
    service: IGalleryService = Depends(get_gallery_service),
) -> ApiResponse[None]:
    await service.delete_image(image_id)
    return ApiResponse(message="Gallery image deleted successfully")
