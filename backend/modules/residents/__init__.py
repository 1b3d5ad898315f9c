"""
Residents module.

Admin management of resident records, plus self-service reads and limited
self-service edits.
"""

from .interfaces import IResidentService
from .models import CreateResidentRequest, UpdateResidentRequest, ResidentListResponse
from .exceptions import (
    ResidentNotFoundError,
    ResidentAccessDeniedError,
    ResidentEmailExistsError,
    RoleAssignmentError,
    ProtectedRecordError,
)

__all__ = [
    "IResidentService",
    "CreateResidentRequest",
    "UpdateResidentRequest",
    "ResidentListResponse",
    "ResidentNotFoundError",
    "ResidentAccessDeniedError",
    "ResidentEmailExistsError",
    "RoleAssignmentError",
    "ProtectedRecordError",
]
