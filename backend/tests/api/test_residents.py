"""Tests for resident API endpoints."""

from shared.models import Role
from tests.conftest import ADMIN_ID, OTHER_RESIDENT_ID, RESIDENT_ID, bearer, seed_user

NEW_RESIDENT = {
    "email": "carol@example.com",
    "name": "Carol",
    "phoneNumber": "555-0101",
    "flatNumber": "C-303",
    "blockNumber": "C",
}


class TestListResidents:
    def test_admin_lists_residents(self, client, admin_headers):
        response = client.get("/api/residents", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert [r["id"] for r in data["residents"]] == [RESIDENT_ID, OTHER_RESIDENT_ID]
        assert data["pagination"]["total"] == 2

    def test_resident_cannot_list(self, client, resident_headers):
        response = client.get("/api/residents", headers=resident_headers)
        assert response.status_code == 403


class TestResidentOwnership:
    def test_read_own_record(self, client, resident_headers):
        response = client.get(f"/api/residents/{RESIDENT_ID}", headers=resident_headers)

        assert response.status_code == 200
        assert response.json()["data"]["flatNumber"] == "A-101"

    def test_cannot_read_other_record(self, client, resident_headers):
        response = client.get(f"/api/residents/{OTHER_RESIDENT_ID}", headers=resident_headers)

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to access this resident profile"

    def test_self_role_escalation_has_no_effect(self, client, resident_headers):
        """A resident setting their own role to admin keeps the resident role."""
        response = client.put(
            f"/api/residents/{RESIDENT_ID}",
            json={"name": "Resident One", "role": "admin", "flatNumber": "PH-1"},
            headers=resident_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["role"] == "resident"
        assert response.json()["data"]["flatNumber"] == "A-101"

        event = {"title": "x", "description": "x", "date": "2025-01-01T00:00:00Z", "location": "x"}
        assert client.post("/api/events", json=event, headers=resident_headers).status_code == 403

    def test_cannot_update_other_record(self, client, resident_headers):
        response = client.put(
            f"/api/residents/{OTHER_RESIDENT_ID}",
            json={"name": "Hacked"},
            headers=resident_headers,
        )
        assert response.status_code == 403


class TestAdminResidentManagement:
    def test_create_resident(self, client, admin_headers):
        response = client.post("/api/residents", json=NEW_RESIDENT, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["displayName"] == "Carol"
        assert data["role"] == "resident"
        assert data["createdBy"] == ADMIN_ID

    def test_create_duplicate_email(self, client, admin_headers):
        client.post("/api/residents", json=NEW_RESIDENT, headers=admin_headers)

        response = client.post("/api/residents", json=NEW_RESIDENT, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Resident with this email already exists"

    def test_create_requires_email_and_name(self, client, admin_headers):
        response = client.post("/api/residents", json={"flatNumber": "C-303"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Required fields missing: email, name"

    def test_resident_cannot_create(self, client, resident_headers):
        response = client.post("/api/residents", json=NEW_RESIDENT, headers=resident_headers)
        assert response.status_code == 403

    def test_admin_grants_role(self, client, admin_headers, resident_headers):
        response = client.put(f"/api/residents/{RESIDENT_ID}", json={"role": "admin"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"]["role"] == "admin"
        assert client.get("/api/residents", headers=resident_headers).status_code == 200

    def test_admin_cannot_grant_super_admin(self, client, admin_headers):
        response = client.put(f"/api/residents/{RESIDENT_ID}", json={"role": "super_admin"}, headers=admin_headers)
        assert response.status_code == 403

    def test_delete_resident(self, client, admin_headers):
        response = client.delete(f"/api/residents/{OTHER_RESIDENT_ID}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/residents/{OTHER_RESIDENT_ID}", headers=admin_headers).status_code == 404

    def test_admin_cannot_demote_or_delete_super_admin(self, client, container, admin_headers):
        seed_user(container, "root-user-1", Role.SUPER_ADMIN, display_name="Root")

        demote = client.put("/api/residents/root-user-1", json={"role": "resident"}, headers=admin_headers)
        delete = client.delete("/api/residents/root-user-1", headers=admin_headers)

        assert demote.status_code == 403
        assert demote.json()["error"]["code"] == "PROTECTED_RECORD"
        assert delete.status_code == 403
        assert container.users.get("root-user-1").role == Role.SUPER_ADMIN

    def test_super_admin_can_demote_super_admin(self, client, container):
        seed_user(container, "root-user-1", Role.SUPER_ADMIN)
        seed_user(container, "root-user-2", Role.SUPER_ADMIN)

        response = client.put(
            "/api/residents/root-user-1", json={"role": "admin"}, headers=bearer("root-user-2"),
        )

        assert response.status_code == 200
        assert response.json()["data"]["role"] == "admin"
