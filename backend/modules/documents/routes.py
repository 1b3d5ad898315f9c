"""
Document API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_document_service, get_list_params
from api.middleware.auth import get_auth_context, require_admin, require_authenticated
from shared.models import AuthContext, ListParams
from shared.responses import ApiResponse

from .interfaces import IDocumentService
from .models import CreateDocumentRequest, Document, DocumentListResponse, UpdateDocumentRequest

router = APIRouter(dependencies=[Depends(require_authenticated)])


@router.get("", response_model=ApiResponse[DocumentListResponse])
async def list_documents(
    category: Optional[str] = Query(default=None, description="Filter by category"),
    params: ListParams = Depends(get_list_params),
    context: AuthContext = Depends(get_auth_context),
    service: IDocumentService = Depends(get_document_service),
) -> ApiResponse[DocumentListResponse]:
    """
    List documents, newest first.

    Residents only see public documents; admins see everything.
    """
    result = await service.list_documents(context, params, category)
    return ApiResponse(message="Documents retrieved successfully", data=result)


@router.get("/{document_id}", response_model=ApiResponse[Document])
async def get_document(
    document_id: str,
    context: AuthContext = Depends(get_auth_context),
    service: IDocumentService = Depends(get_document_service),
) -> ApiResponse[Document]:
    document = await service.get_document(context, document_id)
    return ApiResponse(message="Document retrieved successfully", data=document)


@router.post("", response_model=ApiResponse[Document], status_code=201)
async def create_document(
    request: CreateDocumentRequest,
    context: AuthContext = Depends(require_admin),
    service: IDocumentService = Depends(get_document_service),
) -> ApiResponse[Document]:
    """Register a document that already lives in object storage (admin only)."""
    document = await service.create_document(context, request)
    return ApiResponse(message="Document created successfully", data=document)


@router.put("/{document_id}", response_model=ApiResponse[Document])
async def update_document(
    document_id: str,
    request: UpdateDocumentRequest,
    _: AuthContext = Depends(require_admin),
    service: IDocumentService = Depends(get_document_service),
) -> ApiResponse[Document]:
    document = await service.update_document(document_id, request)
    return ApiResponse(message="Document updated successfully", data=document)


@router.delete("/{document_id}", response_model=ApiResponse[None])
async def delete_document(
    document_id: str,
    _: AuthContext = Depends(require_admin),
    service: IDocumentService = Depends(get_document_service),
) -> ApiResponse[None]:
    await service.delete_document(document_id)
    return ApiResponse(message="Document deleted successfully")
