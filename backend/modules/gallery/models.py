"""
Gallery module data models.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.models import CamelModel, Pagination


class CreateGalleryImageRequest(CamelModel):
    """Request to add an image to the gallery."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    image_url: str = Field(..., min_length=1)
    thumbnail_url: Optional[str] = None
    category: str = Field(..., min_length=1, max_length=100)
    album: Optional[str] = Field(None, max_length=100)
    tags: list[str] = Field(default_factory=list)


class UpdateGalleryImageRequest(CamelModel):
    """Partial gallery image update."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    album: Optional[str] = Field(None, max_length=100)
    tags: Optional[list[str]] = None


class GalleryImage(CamelModel):
    """A gallery image reference."""

    id: str
    title: str
    description: str = ""
    image_url: str
    thumbnail_url: Optional[str] = None
    category: str
    album: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    uploaded_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GalleryListResponse(CamelModel):
    """Paginated list of gallery images."""

    images: list[GalleryImage]
    pagination: Pagination
