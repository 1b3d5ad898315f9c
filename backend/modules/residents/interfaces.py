"""
Residents module interface.
"""

from typing import Protocol, runtime_checkable

from modules.users.models import UserRecord
from shared.models import AuthContext, ListParams

from .models import CreateResidentRequest, ResidentListResponse, UpdateResidentRequest


@runtime_checkable
class IResidentService(Protocol):
    """
    Interface for resident record management.

    Ownership is enforced here: get and update accept the record's owner
    or an admin. list, create and delete are admin-only and gated at the
    route.
    """

    async def list_residents(self, params: ListParams) -> ResidentListResponse:
        ...

    async def get_resident(self, context: AuthContext, resident_id: str) -> UserRecord:
        """
        Raises:
            ResidentAccessDeniedError: If the caller is neither owner nor admin
            ResidentNotFoundError: If the record doesn't exist
        """
        ...

    async def create_resident(self, context: AuthContext, request: CreateResidentRequest) -> UserRecord:
        """
        Raises:
            ResidentEmailExistsError: If a record already uses this email
        """
        ...

    async def update_resident(
        self,
        context: AuthContext,
        resident_id: str,
        request: UpdateResidentRequest,
    ) -> UserRecord:
        """
        Apply the fields the caller is allowed to change.

        A role change is visible to the very next authenticated request,
        because roles are re-read from the record every time.
        """
        ...

    async def delete_resident(self, context: AuthContext, resident_id: str) -> None:
        ...
