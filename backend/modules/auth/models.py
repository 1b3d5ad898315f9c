"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import CamelModel, Role
from modules.users.models import EmergencyContact, PrivacySettings


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth access tokens.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    phone: Optional[str] = Field(None, description="User's phone")
    exp: int = Field(..., description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role claim")
    email_confirmed_at: Optional[str] = Field(None, description="Set when email is verified")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class VerifiedIdentity(BaseModel):
    """
    Identity established by a verified bearer token.

    `role_claim` is whatever the token says about the role. It is kept for
    diagnostics only and never used for authorization decisions.
    """

    id: str = Field(..., description="Identity provider user ID")
    email: str = Field(default="", description="User's email address")
    email_verified: bool = Field(default=False)
    display_name: str = Field(default="")
    phone: Optional[str] = None
    role_claim: Optional[str] = None

    model_config = {"frozen": True}


class SignInResult(BaseModel):
    """Tokens returned by a successful password sign-in."""

    identity: VerifiedIdentity
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    display_name: str = Field(default="", max_length=200)
    phone_number: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ChangePasswordRequest(CamelModel):
    new_password: str = Field(..., min_length=6)


class UpdateProfileRequest(CamelModel):
    """
    Self-service profile update.

    Unknown keys (including `role`) are ignored, so a user can never
    change their own role through this endpoint.
    """

    display_name: Optional[str] = Field(None, max_length=200)
    phone_number: Optional[str] = None
    photo_url: Optional[str] = None
    privacy: Optional[PrivacySettings] = None
    emergency_contact: Optional[EmergencyContact] = None


class UserProfile(CamelModel):
    """
    Merged view of a user: identity provider fields plus the
    application user record.
    """

    id: str
    email: str
    email_verified: bool = False
    role: Role
    display_name: str = ""
    phone_number: str = ""
    flat_number: str = ""
    block_number: str = ""
    photo_url: Optional[str] = None
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)
    emergency_contact: Optional[EmergencyContact] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class RegisterResponse(CamelModel):
    user: UserProfile
    token: Optional[str] = Field(None, description="Development token, only in development mode")


class LoginResponse(CamelModel):
    user: UserProfile
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
