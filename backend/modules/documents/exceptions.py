"""
Documents module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class DocumentNotFoundError(NotFoundError):
    """Raised when a document is not found or not visible to the caller."""

    def __init__(self, document_id: str):
        super().__init__(
            "Document not found",
            code="DOCUMENT_NOT_FOUND",
            details={"document_id": document_id},
        )


class DocumentTooLargeError(ValidationError):
    """Raised when a document exceeds the configured upload limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"File size exceeds the {limit} byte limit",
            code="DOCUMENT_TOO_LARGE",
            details={"size": size, "limit": limit},
        )
