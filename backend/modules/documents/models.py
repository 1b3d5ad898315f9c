"""
Documents module data models.

Documents are references to files kept in external object storage. The API
stores metadata and the file URL, never the bytes.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.models import CamelModel, Pagination


class CreateDocumentRequest(CamelModel):
    """Request to register a new document."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    category: str = Field(..., min_length=1, max_length=100)
    file_url: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(..., min_length=1, max_length=100, description="MIME type")
    size: Optional[int] = Field(None, ge=0, description="File size in bytes")
    is_public: bool = True


class UpdateDocumentRequest(CamelModel):
    """Partial document update. Omitted fields are left as they are."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    is_public: Optional[bool] = None


class Document(CamelModel):
    """Stored document metadata."""

    id: str
    title: str
    description: str = ""
    category: str
    file_url: str
    file_name: str
    file_type: str
    size: Optional[int] = None
    is_public: bool = True
    uploaded_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DocumentListResponse(CamelModel):
    """Paginated list of documents."""

    documents: list[Document]
    pagination: Pagination
