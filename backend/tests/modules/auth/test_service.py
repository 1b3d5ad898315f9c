import pytest

from modules.auth.exceptions import (
    EmailAlreadyExistsError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
)
from modules.auth.identity import InMemoryIdentityProvider
from modules.auth.models import (
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
)
from modules.auth.service import AuthService, DEV_IDENTITY
from modules.users.store import UserStore
from shared.exceptions import NotFoundError
from shared.models import Role
from shared.store import InMemoryDocumentStore
from tests.conftest import TEST_JWT_SECRET, context_for, create_test_token, make_settings


@pytest.fixture
def identity():
    return InMemoryIdentityProvider(TEST_JWT_SECRET)


@pytest.fixture
def users():
    return UserStore(InMemoryDocumentStore())


@pytest.fixture
def service(identity, users):
    return AuthService(identity, users, make_settings())


@pytest.fixture
def dev_service(identity, users):
    return AuthService(
        identity,
        users,
        make_settings(environment="development", dev_token_bypass=True),
    )


class TestValidateToken:
    @pytest.mark.asyncio
    async def test_validate_valid_token(self, service):
        """Should validate a valid token and return the identity."""
        identity = await service.validate_token(create_test_token(user_id="user-123"))
        assert identity.id == "user-123"
        assert identity.email == "test@example.com"

    @pytest.mark.asyncio
    async def test_validate_expired_token(self, service):
        """Should raise ExpiredTokenError for expired token."""
        with pytest.raises(ExpiredTokenError):
            await service.validate_token(create_test_token(expired=True))

    @pytest.mark.asyncio
    async def test_validate_invalid_token(self, service):
        """Should raise InvalidTokenError for malformed token."""
        with pytest.raises(InvalidTokenError):
            await service.validate_token("not-a-valid-token")

    @pytest.mark.asyncio
    async def test_validate_missing_token(self, service):
        """Should raise MissingTokenError for empty token."""
        with pytest.raises(MissingTokenError):
            await service.validate_token("")

    @pytest.mark.asyncio
    async def test_dev_prefix_rejected_without_bypass(self, service):
        with pytest.raises(InvalidTokenError):
            await service.validate_token("simulated_token_123")

    @pytest.mark.asyncio
    async def test_dev_prefix_accepted_with_bypass(self, dev_service):
        identity = await dev_service.validate_token("simulated_token_123")
        assert identity == DEV_IDENTITY

    @pytest.mark.asyncio
    async def test_bypass_still_verifies_other_tokens(self, dev_service):
        with pytest.raises(InvalidTokenError):
            await dev_service.validate_token("garbage")


class TestRoleResolution:
    @pytest.mark.asyncio
    async def test_first_request_provisions_resident(self, service, users):
        context = await service.authenticate(create_test_token(user_id="new-user", email="new@example.com"))

        assert context.role == Role.RESIDENT
        record = users.get("new-user")
        assert record is not None
        assert record.email == "new@example.com"

    @pytest.mark.asyncio
    async def test_role_comes_from_record(self, service, users):
        users.create({"id": "boss", "email": "boss@example.com", "role": "super_admin"})
        context = await service.authenticate(create_test_token(user_id="boss"))
        assert context.role == Role.SUPER_ADMIN
        assert context.is_admin is True

    @pytest.mark.asyncio
    async def test_token_role_claim_is_ignored(self, service, users):
        """A token claiming admin does not make a resident an admin."""
        users.create({"id": "user-1", "email": "u1@example.com", "role": "resident"})
        token = create_test_token(user_id="user-1", app_metadata={"role": "admin"})

        context = await service.authenticate(token)

        assert context.role == Role.RESIDENT

    @pytest.mark.asyncio
    async def test_role_change_visible_on_next_call(self, service, users):
        users.create({"id": "user-1", "email": "u1@example.com", "role": "admin"})
        token = create_test_token(user_id="user-1")
        assert (await service.authenticate(token)).role == Role.ADMIN

        users.update("user-1", {"role": "resident"})

        assert (await service.authenticate(token)).role == Role.RESIDENT

    @pytest.mark.asyncio
    async def test_unknown_stored_role_is_resident(self, service, users):
        users.create({"id": "user-1", "email": "u1@example.com", "role": "overlord"})
        context = await service.authenticate(create_test_token(user_id="user-1"))
        assert context.role == Role.RESIDENT

    @pytest.mark.asyncio
    async def test_dev_identity_role_from_record(self, dev_service, users):
        users.create({"id": DEV_IDENTITY.id, "email": DEV_IDENTITY.email, "role": "admin"})
        context = await dev_service.authenticate("simulated_token_1")
        assert context.identity_id == DEV_IDENTITY.id
        assert context.role == Role.ADMIN


class TestAccountOperations:
    @pytest.mark.asyncio
    async def test_register_creates_identity_and_record(self, service, users):
        result = await service.register(RegisterRequest(
            email="jane@example.com",
            password="secret1",
            display_name="Jane",
            phone_number="555-0100",
        ))

        assert result.user.role == Role.RESIDENT
        assert result.user.display_name == "Jane"
        assert result.token is None
        assert users.get(result.user.id).phone_number == "555-0100"

    @pytest.mark.asyncio
    async def test_register_in_development_returns_token(self, dev_service):
        result = await dev_service.register(RegisterRequest(email="jane@example.com", password="secret1"))
        assert result.token.startswith("simulated_token_")

    @pytest.mark.asyncio
    async def test_register_duplicate(self, service):
        await service.register(RegisterRequest(email="jane@example.com", password="secret1"))
        with pytest.raises(EmailAlreadyExistsError):
            await service.register(RegisterRequest(email="jane@example.com", password="secret1"))

    @pytest.mark.asyncio
    async def test_login_stamps_last_login(self, service, users):
        registered = await service.register(RegisterRequest(email="jane@example.com", password="secret1"))

        result = await service.login(LoginRequest(email="jane@example.com", password="secret1"))

        assert result.access_token
        assert result.user.id == registered.user.id
        assert users.get(registered.user.id).last_login is not None

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, service):
        await service.register(RegisterRequest(email="jane@example.com", password="secret1"))
        with pytest.raises(InvalidCredentialsError):
            await service.login(LoginRequest(email="jane@example.com", password="nope"))

    @pytest.mark.asyncio
    async def test_password_reset_is_silent(self, service, identity):
        await service.request_password_reset("nobody@example.com")
        assert identity.reset_requests == ["nobody@example.com"]

    @pytest.mark.asyncio
    async def test_get_profile_missing_record(self, service):
        with pytest.raises(NotFoundError):
            await service.get_profile(context_for("ghost"))

    @pytest.mark.asyncio
    async def test_update_profile_never_touches_role(self, service, users):
        registered = await service.register(RegisterRequest(email="jane@example.com", password="secret1"))
        request = UpdateProfileRequest.model_validate({"displayName": "Janet", "role": "admin"})

        profile = await service.update_profile(context_for(registered.user.id), request)

        assert profile.display_name == "Janet"
        assert profile.role == Role.RESIDENT
        assert users.get(registered.user.id).role == Role.RESIDENT

    @pytest.mark.asyncio
    async def test_change_password(self, service):
        registered = await service.register(RegisterRequest(email="jane@example.com", password="secret1"))

        await service.change_password(context_for(registered.user.id), ChangePasswordRequest(new_password="secret2"))

        result = await service.login(LoginRequest(email="jane@example.com", password="secret2"))
        assert result.user.id == registered.user.id
