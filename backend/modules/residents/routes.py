"""
Resident API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_list_params, get_resident_service
from api.middleware.auth import get_auth_context, require_admin, require_authenticated
from modules.users.models import UserRecord
from shared.models import AuthContext, ListParams
from shared.responses import ApiResponse

from .interfaces import IResidentService
from .models import CreateResidentRequest, ResidentListResponse, UpdateResidentRequest

router = APIRouter(dependencies=[Depends(require_authenticated)])


@router.get("", response_model=ApiResponse[ResidentListResponse])
async def list_residents(
    params: ListParams = Depends(get_list_params),
    _: AuthContext = Depends(require_admin),
    service: IResidentService = Depends(get_resident_service),
) -> ApiResponse[ResidentListResponse]:
    """List resident records (admin only)."""
    result = await service.list_residents(params)
    return ApiResponse(message="Residents retrieved successfully", data=result)


@router.get("/{resident_id}", response_model=ApiResponse[UserRecord])
async def get_resident(
    resident_id: str,
    context: AuthContext = Depends(get_auth_context),
    service: IResidentService = Depends(get_resident_service),
) -> ApiResponse[UserRecord]:
    """Get a resident record (the resident themselves, or an admin)."""
    record = await service.get_resident(context, resident_id)
    return ApiResponse(message="Resident retrieved successfully", data=record)


@router.post("", response_model=ApiResponse[UserRecord], status_code=201)
async def create_resident(
    request: CreateResidentRequest,
    context: AuthContext = Depends(require_admin),
    service: IResidentService = Depends(get_resident_service),
) -> ApiResponse[UserRecord]:
    record = await service.create_resident(context, request)
    return ApiResponse(message="Resident created successfully", data=record)


@router.put("/{resident_id}", response_model=ApiResponse[UserRecord])
async def update_resident(
    resident_id: str,
    request: UpdateResidentRequest,
    context: AuthContext = Depends(get_auth_context),
    service: IResidentService = Depends(get_resident_service),
) -> ApiResponse[UserRecord]:
    """
    Update a resident record.

    Residents may change their own name and phone number. Admins may also
    change flat, block and role.
    """
    record = await service.update_resident(context, resident_id, request)
    return ApiResponse(message="Resident updated successfully", data=record)


@router.delete("/{resident_id}", response_model=ApiResponse[None])
async def delete_resident(
    resident_id: str,
    context: AuthContext = Depends(require_admin),
    service: IResidentService = Depends(get_resident_service),
) -> ApiResponse[None]:
    await service.delete_resident(context, resident_id)
    return ApiResponse(message="Resident deleted successfully")
