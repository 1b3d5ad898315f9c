"""
Gallery module.

Photo references (URLs in external object storage) grouped by category
and album.
"""

from .interfaces import IGalleryService
from .models import (
    GalleryImage,
    GalleryListResponse,
    CreateGalleryImageRequest,
    UpdateGalleryImageRequest,
)
from .exceptions import GalleryImageNotFoundError

__all__ = [
    "IGalleryService",
    "GalleryImage",
    "GalleryListResponse",
    "CreateGalleryImageRequest",
    "UpdateGalleryImageRequest",
    "GalleryImageNotFoundError",
]
