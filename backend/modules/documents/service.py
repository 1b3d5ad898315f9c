"""
Documents service implementation.
"""

import logging
from typing import Any, Optional

from shared.config import Settings
from shared.models import AuthContext, ListParams, Pagination
from shared.repository import BaseRepository
from shared.store import Filter, IDocumentStore

from .exceptions import DocumentNotFoundError, DocumentTooLargeError
from .interfaces import IDocumentService
from .models import CreateDocumentRequest, Document, DocumentListResponse, UpdateDocumentRequest

logger = logging.getLogger(__name__)


class DocumentRepository(BaseRepository[Document]):
    collection = "documents"

    def _map(self, row: dict[str, Any]) -> Document:
        return Document.model_validate(row)


class DocumentService(IDocumentService):
    """Document metadata service backed by the document store."""

    def __init__(self, store: IDocumentStore, settings: Settings):
        self._documents = DocumentRepository(store)
        self._max_upload_bytes = settings.max_upload_bytes

    async def list_documents(
        self,
        context: AuthContext,
        params: ListParams,
        category: Optional[str] = None,
    ) -> DocumentListResponse:
        filters: list[Filter] = []
        if category:
            filters.append(Filter(field="category", value=category))
        if not context.is_admin:
            filters.append(Filter(field="is_public", value=True))

        documents, total = self._documents.list(
            params, filters=filters, order_by="created_at", descending=True,
        )
        return DocumentListResponse(
            documents=documents,
            pagination=Pagination.build(total, params.page, params.limit),
        )

    async def get_document(self, context: AuthContext, document_id: str) -> Document:
        document = self._documents.get(document_id)
        # Private documents are indistinguishable from missing ones for residents
        if document is None or (not document.is_public and not context.is_admin):
            raise DocumentNotFoundError(document_id)
        return document

    async def create_document(self, context: AuthContext, request: CreateDocumentRequest) -> Document:
        if request.size is not None and request.size > self._max_upload_bytes:
            raise DocumentTooLargeError(request.size, self._max_upload_bytes)

        document = self._documents.create({
            **request.model_dump(),
            "uploaded_by": context.identity_id,
        })
        logger.info("New document created: %s", document.id)
        return document

    async def update_document(self, document_id: str, request: UpdateDocumentRequest) -> Document:
        if self._documents.get(document_id) is None:
            raise DocumentNotFoundError(document_id)

        changes = {k: v for k, v in request.model_dump(exclude_unset=True).items() if v is not None}
        updated = self._documents.update(document_id, changes)
        if updated is None:
            raise DocumentNotFoundError(document_id)
        logger.info("Document updated: %s", document_id)
        return updated

    async def delete_document(self, document_id: str) -> None:
        if not self._documents.delete(document_id):
            raise DocumentNotFoundError(document_id)
        logger.info("Document deleted: %s", document_id)
