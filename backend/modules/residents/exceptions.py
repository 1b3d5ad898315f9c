"""
Residents module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError, ValidationError


class ResidentNotFoundError(NotFoundError):
    """Raised when a resident record is not found."""

    def __init__(self, resident_id: str):
        super().__init__(
            "Resident not found",
            code="RESIDENT_NOT_FOUND",
            details={"resident_id": resident_id},
        )


class ResidentAccessDeniedError(AuthorizationError):
    """Raised when a non-admin touches someone else's record."""

    def __init__(self, resident_id: str, action: str = "access"):
        super().__init__(
            f"Not authorized to {action} this resident profile",
            code="RESIDENT_ACCESS_DENIED",
            details={"resident_id": resident_id},
        )


class ResidentEmailExistsError(ValidationError):
    """Raised when creating a resident with an email already on record."""

    def __init__(self, email: str):
        super().__init__(
            "Resident with this email already exists",
            code="RESIDENT_EMAIL_EXISTS",
            details={"email": email},
        )


class RoleAssignmentError(AuthorizationError):
    """Raised when an admin tries to grant a role above their own."""

    def __init__(self, role: str):
        super().__init__(
            f"Not authorized to assign role '{role}'",
            code="ROLE_ASSIGNMENT_DENIED",
            details={"role": role},
        )


class ProtectedRecordError(AuthorizationError):
    """Raised when an admin modifies or deletes a super admin's record."""

    def __init__(self, resident_id: str, action: str = "update"):
        super().__init__(
            f"Only a super admin may {action} a super admin account",
            code="PROTECTED_RECORD",
            details={"resident_id": resident_id},
        )
