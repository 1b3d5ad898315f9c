"""
Residents module data models.

Residents are application user records with role "resident". The wire
format keeps the original field names (name, phoneNumber, flatNumber,
blockNumber) for writes; reads return the full record.
"""

from typing import Optional
from pydantic import EmailStr, Field

from modules.users.models import UserRecord
from shared.models import CamelModel, Pagination, Role


class CreateResidentRequest(CamelModel):
    """Admin request to register a resident record."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=200)
    phone_number: str = Field(default="", max_length=50)
    flat_number: str = Field(..., min_length=1, max_length=50)
    block_number: str = Field(default="", max_length=50)


class UpdateResidentRequest(CamelModel):
    """
    Partial resident update.

    name and phoneNumber may be changed by the resident themselves.
    flatNumber, blockNumber and role are applied only for admins and are
    silently dropped otherwise.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    phone_number: Optional[str] = Field(None, max_length=50)
    flat_number: Optional[str] = Field(None, min_length=1, max_length=50)
    block_number: Optional[str] = Field(None, max_length=50)
    role: Optional[Role] = None


class ResidentListResponse(CamelModel):
    """Paginated list of resident records."""

    residents: list[UserRecord]
    pagination: Pagination
