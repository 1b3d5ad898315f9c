"""
Uniform response envelope.

Every API response, success or error, is wrapped as:

    success: {"success": true,  "message": str, "data": <payload>, "timestamp": ISO8601}
    error:   {"success": false, "message": str, "error": <details>, "timestamp": ISO8601}
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


def utc_timestamp() -> str:
    """Current time as an ISO 8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""

    success: bool = True
    message: str = "Success"
    data: Optional[T] = None
    timestamp: str = Field(default_factory=utc_timestamp)


class ErrorDetail(BaseModel):
    """Machine-readable part of an error envelope."""

    code: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    """Error envelope."""

    success: bool = False
    message: str
    error: Optional[ErrorDetail] = None
    timestamp: str = Field(default_factory=utc_timestamp)
