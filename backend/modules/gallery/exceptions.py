"""
Gallery module exceptions.
"""

from shared.exceptions import NotFoundError


class GalleryImageNotFoundError(NotFoundError):
    """Raised when a gallery image is not found."""

    def __init__(self, image_id: str):
        super().__init__(
            "Gallery image not found",
            code="GALLERY_IMAGE_NOT_FOUND",
            details={"image_id": image_id},
        )
