"""
User store.

Persists application user records in the "users" collection of whatever
document store the container was built with.
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

from shared.exceptions import ExternalServiceError
from shared.models import ListParams, Role
from shared.repository import BaseRepository
from shared.store import Filter

from .models import UserRecord

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


def normalize_email(email: str) -> str:
    return email.strip().lower()


@runtime_checkable
class IUserStore(Protocol):
    """Interface for application user record persistence."""

    def get(self, user_id: str) -> Optional[UserRecord]:
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def create_default(
        self,
        user_id: str,
        email: str,
        display_name: str = "",
        phone_number: str = "",
    ) -> UserRecord:
        """
        Create a resident record for an identity if none exists.

        Idempotent: concurrent first requests for the same identity all
        end up with the same record.
        """
        ...

    def create(self, data: dict[str, Any]) -> UserRecord:
        ...

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        ...

    def delete(self, user_id: str) -> bool:
        ...

    def list(
        self,
        params: ListParams,
        role: Optional[Role] = None,
    ) -> tuple[list[UserRecord], int]:
        ...


class UserStore(BaseRepository[UserRecord]):
    """User store over an IDocumentStore."""

    collection = USERS_COLLECTION

    def _map(self, row: dict[str, Any]) -> UserRecord:
        data = dict(row)
        if data.get("role") not in {r.value for r in Role}:
            # Unknown role strings get the least privilege
            logger.warning("User %s has unknown role %r, treating as resident", data.get("id"), data.get("role"))
            data["role"] = Role.RESIDENT.value
        for key in ("display_name", "phone_number", "flat_number", "block_number", "email"):
            if data.get(key) is None:
                data[key] = ""
        if data.get("privacy") is None:
            data.pop("privacy", None)
        return UserRecord.model_validate(data)

    def create(self, data: dict[str, Any]) -> UserRecord:
        if data.get("email"):
            data = {**data, "email": normalize_email(data["email"])}
        return super().create(data)

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[UserRecord]:
        if data.get("email"):
            data = {**data, "email": normalize_email(data["email"])}
        return super().update(user_id, data)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        page = self._store.query(
            self.collection,
            filters=[Filter(field="email", value=normalize_email(email))],
            limit=1,
        )
        if not page.items:
            return None
        return self._map(page.items[0])

    def create_default(
        self,
        user_id: str,
        email: str,
        display_name: str = "",
        phone_number: str = "",
    ) -> UserRecord:
        existing = self.get(user_id)
        if existing is not None:
            return existing

        try:
            record = self.create({
                "id": user_id,
                "email": email,
                "display_name": display_name,
                "phone_number": phone_number,
                "role": Role.RESIDENT.value,
            })
        except ExternalServiceError:
            # Lost a race with another request creating the same record
            existing = self.get(user_id)
            if existing is None:
                raise
            return existing

        logger.info("Provisioned default resident record for %s", user_id)
        return record

    def list(
        self,
        params: ListParams,
        role: Optional[Role] = None,
        order_by: Optional[str] = "display_name",
        descending: bool = False,
    ) -> tuple[list[UserRecord], int]:
        filters = [Filter(field="role", value=role.value)] if role else None
        return super().list(params, filters=filters, order_by=order_by, descending=descending)
