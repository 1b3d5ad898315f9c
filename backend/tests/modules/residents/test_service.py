"""Tests for modules/residents/service.py."""

import pytest

from modules.residents.exceptions import (
    ProtectedRecordError,
    ResidentAccessDeniedError,
    ResidentEmailExistsError,
    ResidentNotFoundError,
    RoleAssignmentError,
)
from modules.residents.models import CreateResidentRequest, UpdateResidentRequest
from modules.residents.service import ResidentService
from modules.users.store import UserStore
from shared.models import ListParams, Role
from shared.store import InMemoryDocumentStore
from tests.conftest import context_for

ADMIN = context_for("admin-1", Role.ADMIN)
SUPER_ADMIN = context_for("root-1", Role.SUPER_ADMIN)
ALICE = context_for("alice")
BOB = context_for("bob")


@pytest.fixture
def users() -> UserStore:
    users = UserStore(InMemoryDocumentStore())
    users.create({"id": "admin-1", "email": "admin@example.com", "role": "admin", "display_name": "Admin"})
    users.create({"id": "alice", "email": "alice@example.com", "role": "resident", "display_name": "Alice", "flat_number": "A-101"})
    users.create({"id": "bob", "email": "bob@example.com", "role": "resident", "display_name": "Bob", "flat_number": "B-202"})
    users.create({"id": "root-1", "email": "root@example.com", "role": "super_admin", "display_name": "Root"})
    return users


@pytest.fixture
def service(users) -> ResidentService:
    return ResidentService(users)


class TestListAndGet:
    @pytest.mark.asyncio
    async def test_list_only_residents(self, service):
        result = await service.list_residents(ListParams())
        assert [r.display_name for r in result.residents] == ["Alice", "Bob"]
        assert result.pagination.total == 2

    @pytest.mark.asyncio
    async def test_resident_reads_own_record(self, service):
        record = await service.get_resident(ALICE, "alice")
        assert record.flat_number == "A-101"

    @pytest.mark.asyncio
    async def test_resident_cannot_read_other(self, service):
        with pytest.raises(ResidentAccessDeniedError):
            await service.get_resident(ALICE, "bob")

    @pytest.mark.asyncio
    async def test_admin_reads_any(self, service):
        assert (await service.get_resident(ADMIN, "bob")).id == "bob"

    @pytest.mark.asyncio
    async def test_missing(self, service):
        with pytest.raises(ResidentNotFoundError):
            await service.get_resident(ADMIN, "ghost")


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_resident(self, service):
        record = await service.create_resident(ADMIN, CreateResidentRequest.model_validate({
            "email": "Carol@Example.com",
            "name": "Carol",
            "phoneNumber": "555-0101",
            "flatNumber": "C-303",
        }))

        assert record.email == "carol@example.com"
        assert record.role == Role.RESIDENT
        assert record.created_by == "admin-1"

    @pytest.mark.asyncio
    async def test_duplicate_email_any_case(self, service, users):
        users.create_default("identity-9", "Dave@Example.com")

        with pytest.raises(ResidentEmailExistsError):
            await service.create_resident(ADMIN, CreateResidentRequest(
                email="dave@example.com", name="Dave", flat_number="D-404",
            ))

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service):
        with pytest.raises(ResidentEmailExistsError):
            await service.create_resident(ADMIN, CreateResidentRequest(
                email="alice@example.com", name="Alice Again", flat_number="A-102",
            ))


class TestUpdate:
    @pytest.mark.asyncio
    async def test_self_update_name_and_phone(self, service):
        updated = await service.update_resident(
            ALICE, "alice", UpdateResidentRequest(name="Alice Smith", phone_number="555-0199"),
        )
        assert updated.display_name == "Alice Smith"
        assert updated.phone_number == "555-0199"

    @pytest.mark.asyncio
    async def test_self_privileged_fields_ignored(self, service, users):
        """A resident sending role or flat changes gets them dropped."""
        updated = await service.update_resident(
            ALICE,
            "alice",
            UpdateResidentRequest.model_validate({"name": "Alice", "role": "admin", "flatNumber": "PH-1"}),
        )

        assert updated.role == Role.RESIDENT
        assert updated.flat_number == "A-101"
        assert users.get("alice").role == Role.RESIDENT

    @pytest.mark.asyncio
    async def test_resident_cannot_update_other(self, service):
        with pytest.raises(ResidentAccessDeniedError) as exc_info:
            await service.update_resident(BOB, "alice", UpdateResidentRequest(name="Hacked"))
        assert exc_info.value.message == "Not authorized to update this resident profile"

    @pytest.mark.asyncio
    async def test_admin_updates_privileged_fields(self, service):
        updated = await service.update_resident(
            ADMIN, "alice", UpdateResidentRequest(flat_number="A-102", block_number="A", role=Role.SECURITY),
        )
        assert updated.flat_number == "A-102"
        assert updated.block_number == "A"
        assert updated.role == Role.SECURITY

    @pytest.mark.asyncio
    async def test_admin_cannot_grant_super_admin(self, service):
        with pytest.raises(RoleAssignmentError):
            await service.update_resident(ADMIN, "alice", UpdateResidentRequest(role=Role.SUPER_ADMIN))

    @pytest.mark.asyncio
    async def test_super_admin_can_grant_super_admin(self, service):
        updated = await service.update_resident(SUPER_ADMIN, "alice", UpdateResidentRequest(role=Role.SUPER_ADMIN))
        assert updated.role == Role.SUPER_ADMIN

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_super_admin(self, service, users):
        with pytest.raises(ProtectedRecordError):
            await service.update_resident(ADMIN, "root-1", UpdateResidentRequest(role=Role.RESIDENT))
        assert users.get("root-1").role == Role.SUPER_ADMIN

    @pytest.mark.asyncio
    async def test_super_admin_can_demote_super_admin(self, service):
        other = context_for("root-2", Role.SUPER_ADMIN)
        updated = await service.update_resident(other, "root-1", UpdateResidentRequest(role=Role.ADMIN))
        assert updated.role == Role.ADMIN

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        with pytest.raises(ResidentNotFoundError):
            await service.update_resident(ADMIN, "ghost", UpdateResidentRequest(name="x"))


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, service, users):
        await service.delete_resident(ADMIN, "bob")
        assert users.get("bob") is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(ResidentNotFoundError):
            await service.delete_resident(ADMIN, "ghost")

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_super_admin(self, service, users):
        with pytest.raises(ProtectedRecordError):
            await service.delete_resident(ADMIN, "root-1")
        assert users.get("root-1") is not None

    @pytest.mark.asyncio
    async def test_super_admin_can_delete_super_admin(self, service, users):
        await service.delete_resident(context_for("root-2", Role.SUPER_ADMIN), "root-1")
        assert users.get("root-1") is None
