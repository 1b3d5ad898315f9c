"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime, timezone
from enum import Enum
from math import ceil
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """Authorization roles stored on the application user record."""

    RESIDENT = "resident"
    ADMIN = "admin"
    SECURITY = "security"
    SUPER_ADMIN = "super_admin"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


class CamelModel(BaseModel):
    """
    Base model for API payloads.

    Fields are snake_case in Python and camelCase on the wire. Both
    spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuthContext(BaseModel):
    """
    Authenticated identity for a single request.

    Built fresh on every request from the verified bearer token plus the
    application user record. The role always comes from the record.
    """

    identity_id: str = Field(..., description="Identity provider user ID")
    email: str = Field(default="", description="User's email address")
    role: Role = Field(..., description="Role read from the user record")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES


class Pagination(CamelModel):
    """Pagination block returned with every list response."""

    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, pages=ceil(total / limit) if limit else 0)


class Page(BaseModel):
    """One page of raw rows from a document store query."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0


class ListParams(BaseModel):
    """Normalized page/limit pair for list endpoints."""

    page: int = 1
    limit: int = 100

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def drop_unset(data: dict[str, Any], keep_none: Optional[set[str]] = None) -> dict[str, Any]:
    """Remove None values, except for keys explicitly allowed to be cleared."""
    keep_none = keep_none or set()
    return {k: v for k, v in data.items() if v is not None or k in keep_none}


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for storage (UTC, ISO 8601)."""
    value = as_utc(value)
    return value.isoformat() if value is not None else None
