"""
Gallery module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthContext, ListParams

from .models import (
    CreateGalleryImageRequest,
    GalleryImage,
    GalleryListResponse,
    UpdateGalleryImageRequest,
)


@runtime_checkable
class IGalleryService(Protocol):
    """Interface for gallery operations."""

    async def list_images(
        self,
        params: ListParams,
        category: Optional[str] = None,
        album: Optional[str] = None,
    ) -> GalleryListResponse:
        """List images, newest first, optionally by category and/or album."""
        ...

    async def get_image(self, image_id: str) -> GalleryImage:
        ...

    async def create_image(self, context: AuthContext, request: CreateGalleryImageRequest) -> GalleryImage:
        ...

    async def update_image(self, image_id: str, request: UpdateGalleryImageRequest) -> GalleryImage:
        ...

    async def delete_image(self, image_id: str) -> None:
        ...
