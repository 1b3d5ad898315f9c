"""
Gallery service implementation.
"""

import logging
from typing import Any, Optional

from shared.models import AuthContext, ListParams, Pagination, drop_unset
from shared.repository import BaseRepository
from shared.store import Filter, IDocumentStore

from .exceptions import GalleryImageNotFoundError
from .interfaces import IGalleryService
from .models import (
    CreateGalleryImageRequest,
    GalleryImage,
    GalleryListResponse,
    UpdateGalleryImageRequest,
)

logger = logging.getLogger(__name__)


class GalleryRepository(BaseRepository[GalleryImage]):
    collection = "gallery"

    def _map(self, row: dict[str, Any]) -> GalleryImage:
        data = dict(row)
        data["tags"] = list(data.get("tags") or [])
        return GalleryImage.model_validate(data)


class GalleryService(IGalleryService):
    """Gallery service backed by the document store."""

    def __init__(self, store: IDocumentStore):
        self._images = GalleryRepository(store)

    async def list_images(
        self,
        params: ListParams,
        category: Optional[str] = None,
        album: Optional[str] = None,
    ) -> GalleryListResponse:
        filters: list[Filter] = []
        if category:
            filters.append(Filter(field="category", value=category))
        if album:
            filters.append(Filter(field="album", value=album))

        images, total = self._images.list(
            params, filters=filters, order_by="created_at", descending=True,
        )
        return GalleryListResponse(
            images=images,
            pagination=Pagination.build(total, params.page, params.limit),
        )

    async def get_image(self, image_id: str) -> GalleryImage:
        image = self._images.get(image_id)
        if image is None:
            raise GalleryImageNotFoundError(image_id)
        return image

    async def create_image(self, context: AuthContext, request: CreateGalleryImageRequest) -> GalleryImage:
        data = request.model_dump()
        data["thumbnail_url"] = data["thumbnail_url"] or data["image_url"]
        image = self._images.create({**data, "uploaded_by": context.identity_id})
        logger.info("New gallery image created: %s", image.id)
        return image

    async def update_image(self, image_id: str, request: UpdateGalleryImageRequest) -> GalleryImage:
        await self.get_image(image_id)

        changes = drop_unset(request.model_dump(exclude_unset=True), keep_none={"album"})

        updated = self._images.update(image_id, changes)
        if updated is None:
            raise GalleryImageNotFoundError(image_id)
        logger.info("Gallery image updated: %s", image_id)
        return updated

    async def delete_image(self, image_id: str) -> None:
        if not self._images.delete(image_id):
            raise GalleryImageNotFoundError(image_id)
        logger.info("Gallery image deleted: %s", image_id)
