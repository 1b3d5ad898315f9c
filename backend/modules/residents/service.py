"""
Residents service implementation.
"""

import logging
from typing import Any

from modules.users.models import UserRecord
from modules.users.store import IUserStore
from shared.models import AuthContext, ListParams, Pagination, Role

from .exceptions import (
    ProtectedRecordError,
    ResidentAccessDeniedError,
    ResidentEmailExistsError,
    ResidentNotFoundError,
    RoleAssignmentError,
)
from .interfaces import IResidentService
from .models import CreateResidentRequest, ResidentListResponse, UpdateResidentRequest

logger = logging.getLogger(__name__)


class ResidentService(IResidentService):
    """Resident management over the user store."""

    def __init__(self, users: IUserStore):
        self._users = users

    async def list_residents(self, params: ListParams) -> ResidentListResponse:
        residents, total = self._users.list(params, role=Role.RESIDENT)
        return ResidentListResponse(
            residents=residents,
            pagination=Pagination.build(total, params.page, params.limit),
        )

    async def get_resident(self, context: AuthContext, resident_id: str) -> UserRecord:
        if not context.is_admin and context.identity_id != resident_id:
            raise ResidentAccessDeniedError(resident_id)

        record = self._users.get(resident_id)
        if record is None:
            raise ResidentNotFoundError(resident_id)
        return record

    async def create_resident(self, context: AuthContext, request: CreateResidentRequest) -> UserRecord:
        email = str(request.email).lower()
        if self._users.get_by_email(email) is not None:
            raise ResidentEmailExistsError(email)

        record = self._users.create({
            "email": email,
            "display_name": request.name,
            "phone_number": request.phone_number,
            "flat_number": request.flat_number,
            "block_number": request.block_number,
            "role": Role.RESIDENT.value,
            "created_by": context.identity_id,
        })
        logger.info("New resident created: %s", record.id)
        return record

    async def update_resident(
        self,
        context: AuthContext,
        resident_id: str,
        request: UpdateResidentRequest,
    ) -> UserRecord:
        if not context.is_admin and context.identity_id != resident_id:
            raise ResidentAccessDeniedError(resident_id, action="update")

        target = self._users.get(resident_id)
        if target is None:
            raise ResidentNotFoundError(resident_id)
        self._check_not_protected(context, target)

        changes: dict[str, Any] = {}
        if request.name:
            changes["display_name"] = request.name
        if request.phone_number is not None:
            changes["phone_number"] = request.phone_number

        if context.is_admin:
            if request.flat_number:
                changes["flat_number"] = request.flat_number
            if request.block_number is not None:
                changes["block_number"] = request.block_number
            if request.role is not None:
                if request.role == Role.SUPER_ADMIN and context.role != Role.SUPER_ADMIN:
                    raise RoleAssignmentError(request.role.value)
                changes["role"] = request.role.value
        elif request.role is not None or request.flat_number or request.block_number is not None:
            logger.warning(
                "User %s tried to change privileged fields on their own record; ignored",
                context.identity_id,
            )

        updated = self._users.update(resident_id, changes)
        if updated is None:
            raise ResidentNotFoundError(resident_id)

        if "role" in changes:
            logger.info("Role of %s set to %s by %s", resident_id, changes["role"], context.identity_id)
        logger.info("Resident updated: %s", resident_id)
        return updated

    async def delete_resident(self, context: AuthContext, resident_id: str) -> None:
        target = self._users.get(resident_id)
        if target is None:
            raise ResidentNotFoundError(resident_id)
        self._check_not_protected(context, target, action="delete")

        if not self._users.delete(resident_id):
            raise ResidentNotFoundError(resident_id)
        logger.info("Resident deleted: %s", resident_id)

    @staticmethod
    def _check_not_protected(context: AuthContext, target: UserRecord, action: str = "update") -> None:
        if target.role == Role.SUPER_ADMIN and context.role != Role.SUPER_ADMIN:
            raise ProtectedRecordError(target.id, action=action)
