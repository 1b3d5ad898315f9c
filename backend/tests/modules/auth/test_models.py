import pytest
from pydantic import ValidationError

from modules.auth.models import (
    JWTPayload,
    RegisterRequest,
    UpdateProfileRequest,
    UserProfile,
    VerifiedIdentity,
)
from shared.models import Role


class TestVerifiedIdentity:
    def test_create_identity(self):
        identity = VerifiedIdentity(id="user-123", email="test@example.com", email_verified=True)
        assert identity.id == "user-123"
        assert identity.role_claim is None

    def test_identity_is_immutable(self):
        """VerifiedIdentity should be immutable."""
        identity = VerifiedIdentity(id="user-123")
        with pytest.raises(Exception):
            identity.id = "other"


class TestJWTPayload:
    def test_parse_jwt_payload(self):
        payload = JWTPayload(sub="user-123", email="test@example.com", exp=1234567890)
        assert payload.sub == "user-123"
        assert payload.aud == "authenticated"
        assert payload.app_metadata == {}

    def test_jwt_with_metadata(self):
        payload = JWTPayload(
            sub="user-123",
            exp=1234567890,
            app_metadata={"role": "admin"},
            user_metadata={"full_name": "Test User"},
        )
        assert payload.app_metadata["role"] == "admin"
        assert payload.user_metadata["full_name"] == "Test User"


class TestRegisterRequest:
    def test_accepts_camel_case(self):
        request = RegisterRequest.model_validate({
            "email": "new@example.com",
            "password": "secret1",
            "displayName": "New Person",
            "phoneNumber": "555-0100",
        })
        assert request.display_name == "New Person"
        assert request.phone_number == "555-0100"

    def test_rejects_short_password(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="new@example.com", password="123")

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="not-an-email", password="secret1")


class TestUpdateProfileRequest:
    def test_role_is_not_a_field(self):
        """A role in the body is silently dropped."""
        request = UpdateProfileRequest.model_validate({"displayName": "X", "role": "admin"})
        assert "role" not in request.model_dump(exclude_unset=True)


class TestUserProfile:
    def test_serializes_camel_case(self):
        profile = UserProfile(id="u1", email="a@example.com", role=Role.ADMIN)
        data = profile.model_dump(by_alias=True, mode="json")
        assert data["role"] == "admin"
        assert data["displayName"] == ""
        assert data["privacy"] == {"showEmail": False, "showPhone": False, "showInDirectory": True}
