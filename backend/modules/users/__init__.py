"""
Users module.

Owns the application user record: role, unit and profile fields that the
identity provider does not hold.

Public API:
- IUserStore / UserStore: persistence for user records
- UserRecord: the record model
"""

from .models import (
    UserRecord,
    PrivacySettings,
    EmergencyContact,
    SELF_EDITABLE_FIELDS,
    PRIVILEGED_FIELDS,
)
from .store import IUserStore, UserStore, USERS_COLLECTION

__all__ = [
    "UserRecord",
    "PrivacySettings",
    "EmergencyContact",
    "SELF_EDITABLE_FIELDS",
    "PRIVILEGED_FIELDS",
    "IUserStore",
    "UserStore",
    "USERS_COLLECTION",
]
