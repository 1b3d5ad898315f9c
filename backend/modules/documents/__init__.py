"""
Documents module.

Metadata for community documents (bylaws, notices, forms) whose files
live in external object storage.
"""

from .interfaces import IDocumentService
from .models import Document, DocumentListResponse, CreateDocumentRequest, UpdateDocumentRequest
from .exceptions import DocumentNotFoundError, DocumentTooLargeError

__all__ = [
    "IDocumentService",
    "Document",
    "DocumentListResponse",
    "CreateDocumentRequest",
    "UpdateDocumentRequest",
    "DocumentNotFoundError",
    "DocumentTooLargeError",
]
