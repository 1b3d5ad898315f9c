"""
Application user record models.

The identity provider owns login, email and verification. Everything the
portal itself needs to know about a person (role, unit, privacy choices)
lives in the application user record, keyed by the identity id.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from shared.models import CamelModel, Role


class PrivacySettings(CamelModel):
    """Directory visibility choices made by the resident."""

    show_email: bool = False
    show_phone: bool = False
    show_in_directory: bool = True


class EmergencyContact(CamelModel):
    name: str
    relationship: str
    phone: str


class UserRecord(CamelModel):
    """Application user record (one per identity)."""

    id: str = Field(..., description="Identity provider user ID")
    email: str = Field(default="", description="Email copied from the identity")
    role: Role = Field(default=Role.RESIDENT, description="Authorization role")

    display_name: str = Field(default="", description="Name shown in the portal")
    phone_number: str = Field(default="", description="Contact phone")
    flat_number: str = Field(default="", description="Flat / unit number")
    block_number: str = Field(default="", description="Block / building")
    photo_url: Optional[str] = None

    privacy: PrivacySettings = Field(default_factory=PrivacySettings)
    emergency_contact: Optional[EmergencyContact] = None

    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


# Fields a user may change on their own record.
SELF_EDITABLE_FIELDS = frozenset({
    "display_name",
    "phone_number",
    "photo_url",
    "privacy",
    "emergency_contact",
})

# Fields only an admin may change.
PRIVILEGED_FIELDS = frozenset({
    "role",
    "flat_number",
    "block_number",
})
