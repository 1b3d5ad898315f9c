"""
Documents module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthContext, ListParams

from .models import CreateDocumentRequest, Document, DocumentListResponse, UpdateDocumentRequest


@runtime_checkable
class IDocumentService(Protocol):
    """
    Interface for document operations.

    Read methods take the caller's context because visibility depends on
    the role: non-admins only ever see public documents.
    """

    async def list_documents(
        self,
        context: AuthContext,
        params: ListParams,
        category: Optional[str] = None,
    ) -> DocumentListResponse:
        """List visible documents, newest first."""
        ...

    async def get_document(self, context: AuthContext, document_id: str) -> Document:
        """
        Raises:
            DocumentNotFoundError: If missing, or private and the caller is not an admin
        """
        ...

    async def create_document(self, context: AuthContext, request: CreateDocumentRequest) -> Document:
        """
        Raises:
            DocumentTooLargeError: If size exceeds the upload limit
        """
        ...

    async def update_document(self, document_id: str, request: UpdateDocumentRequest) -> Document:
        ...

    async def delete_document(self, document_id: str) -> None:
        ...
