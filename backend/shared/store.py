"""
Document store capability.

Every resource type lives in one collection (one Supabase table). Business
logic talks to IDocumentStore only; which implementation backs it is decided
once at startup by the service container:

- SupabaseDocumentStore: PostgREST tables plus two Postgres functions for
  atomic set membership updates (see migrations/).
- InMemoryDocumentStore: process-local dictionaries, used by tests and the
  "memory" backend.
"""

import copy
import logging
import threading
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional, Protocol, runtime_checkable

from pydantic import BaseModel
from supabase import Client

from .exceptions import ExternalServiceError
from .models import Page

logger = logging.getLogger(__name__)


FilterOp = Literal["eq", "neq", "gt", "gte", "lt", "lte", "in", "gt_or_null"]


class Filter(BaseModel):
    """A single column predicate, pushed down to the database."""

    field: str
    op: FilterOp = "eq"
    value: Any = None


class SetUpdate(str, Enum):
    """Outcome of an atomic set-membership update."""

    ADDED = "added"
    REMOVED = "removed"
    ALREADY_PRESENT = "already_present"
    NOT_PRESENT = "not_present"
    FULL = "full"
    NOT_FOUND = "not_found"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@runtime_checkable
class IDocumentStore(Protocol):
    """
    Interface for collection-oriented persistence.

    Rows are plain dicts with snake_case keys and a string "id".
    Implementations raise ExternalServiceError when the backend fails.
    """

    def insert(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a row. An "id" is generated unless supplied. Returns the stored row."""
        ...

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Fetch one row by id, or None."""
        ...

    def query(
        self,
        collection: str,
        filters: Optional[list[Filter]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Page:
        """Filter, sort and paginate in the store. Page.total counts all matches."""
        ...

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Merge fields into a row. Returns the updated row, or None if absent."""
        ...

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a row. Returns False if it did not exist."""
        ...

    def add_to_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        value: str,
        capacity_field: Optional[str] = None,
    ) -> SetUpdate:
        """
        Atomically add value to the array column `field`.

        Fails with ALREADY_PRESENT if value is a member, and with FULL if the
        row's `capacity_field` is set and the array already holds that many.
        """
        ...

    def remove_from_set(self, collection: str, doc_id: str, field: str, value: str) -> SetUpdate:
        """Atomically remove value from the array column `field`."""
        ...


# ---------------------------------------------------------------------------
# Supabase implementation
# ---------------------------------------------------------------------------


class SupabaseDocumentStore(IDocumentStore):
    """
    Document store backed by Supabase PostgREST.

    Note: this store does NOT perform authorization checks.
    It runs with the service role; services decide who may do what.
    """

    def __init__(self, client: Client) -> None:
        self._db = client

    def _execute(self, query: Any, operation: str) -> Any:
        try:
            return query.execute()
        except Exception as e:
            logger.error("Supabase %s failed", operation, exc_info=e)
            raise ExternalServiceError(f"{operation} failed", service="database") from e

    def insert(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        result = self._execute(self._db.table(collection).insert(data), f"insert into {collection}")
        return result.data[0]

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        result = self._execute(
            self._db.table(collection).select("*").eq("id", doc_id).limit(1),
            f"select from {collection}",
        )
        if not result.data:
            return None
        return result.data[0]

    def query(
        self,
        collection: str,
        filters: Optional[list[Filter]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Page:
        query = self._db.table(collection).select("*", count="exact")
        for f in filters or []:
            query = self._apply_filter(query, f)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.range(offset, offset + limit - 1)

        result = self._execute(query, f"query {collection}")
        return Page(items=result.data or [], total=result.count or 0)

    @staticmethod
    def _apply_filter(query: Any, f: Filter) -> Any:
        if f.op == "in":
            return query.in_(f.field, list(f.value))
        if f.op == "gt_or_null":
            return query.or_(f"{f.field}.is.null,{f.field}.gt.{f.value}")
        return getattr(query, f.op)(f.field, f.value)

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        result = self._execute(
            self._db.table(collection).update(data).eq("id", doc_id),
            f"update {collection}",
        )
        if not result.data:
            return None
        return result.data[0]

    def delete(self, collection: str, doc_id: str) -> bool:
        result = self._execute(
            self._db.table(collection).delete().eq("id", doc_id),
            f"delete from {collection}",
        )
        return bool(result.data)

    def add_to_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        value: str,
        capacity_field: Optional[str] = None,
    ) -> SetUpdate:
        result = self._execute(
            self._db.rpc(
                "set_add_capped",
                {
                    "p_table": collection,
                    "p_id": doc_id,
                    "p_field": field,
                    "p_value": value,
                    "p_capacity_field": capacity_field,
                },
            ),
            f"set add on {collection}",
        )
        return SetUpdate(result.data)

    def remove_from_set(self, collection: str, doc_id: str, field: str, value: str) -> SetUpdate:
        result = self._execute(
            self._db.rpc(
                "set_remove",
                {
                    "p_table": collection,
                    "p_id": doc_id,
                    "p_field": field,
                    "p_value": value,
                },
            ),
            f"set remove on {collection}",
        )
        return SetUpdate(result.data)


# ---------------------------------------------------------------------------
# In-memory implementation
# ---------------------------------------------------------------------------


def _matches(row: dict[str, Any], f: Filter) -> bool:
    value = row.get(f.field)
    if f.op == "eq":
        return value == f.value
    if f.op == "neq":
        return value != f.value
    if f.op == "in":
        return value in f.value
    if f.op == "gt_or_null":
        return value is None or value > f.value
    if value is None:
        return False
    if f.op == "gt":
        return value > f.value
    if f.op == "gte":
        return value >= f.value
    if f.op == "lt":
        return value < f.value
    return value <= f.value


class InMemoryDocumentStore(IDocumentStore):
    """
    Process-local document store.

    A single lock serializes every operation, which makes set updates
    atomic in the same way the Postgres functions are.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def _table(self, collection: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def insert(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            row = copy.deepcopy(data)
            row["id"] = str(row.get("id") or uuid.uuid4())
            row.setdefault("created_at", now_iso())
            row.setdefault("updated_at", row["created_at"])
            self._table(collection)[row["id"]] = row
            return copy.deepcopy(row)

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            row = self._table(collection).get(doc_id)
            return copy.deepcopy(row) if row is not None else None

    def query(
        self,
        collection: str,
        filters: Optional[list[Filter]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> Page:
        with self._lock:
            rows = [
                row for row in self._table(collection).values()
                if all(_matches(row, f) for f in filters or [])
            ]
            if order_by:
                # Rows without the sort key go last
                present = [r for r in rows if r.get(order_by) is not None]
                missing = [r for r in rows if r.get(order_by) is None]
                present.sort(key=lambda r: r[order_by], reverse=descending)
                rows = present + missing
            total = len(rows)
            if limit is not None:
                rows = rows[offset:offset + limit]
            return Page(items=copy.deepcopy(rows), total=total)

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> Optional[dict[str, Any]]:
        with self._lock:
            row = self._table(collection).get(doc_id)
            if row is None:
                return None
            row.update(copy.deepcopy(data))
            return copy.deepcopy(row)

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._table(collection).pop(doc_id, None) is not None

    def add_to_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        value: str,
        capacity_field: Optional[str] = None,
    ) -> SetUpdate:
        with self._lock:
            row = self._table(collection).get(doc_id)
            if row is None:
                return SetUpdate.NOT_FOUND
            members = list(row.get(field) or [])
            if value in members:
                return SetUpdate.ALREADY_PRESENT
            capacity = row.get(capacity_field) if capacity_field else None
            if capacity is not None and len(members) >= capacity:
                return SetUpdate.FULL
            members.append(value)
            row[field] = members
            row["updated_at"] = now_iso()
            return SetUpdate.ADDED

    def remove_from_set(self, collection: str, doc_id: str, field: str, value: str) -> SetUpdate:
        with self._lock:
            row = self._table(collection).get(doc_id)
            if row is None:
                return SetUpdate.NOT_FOUND
            members = list(row.get(field) or [])
            if value not in members:
                return SetUpdate.NOT_PRESENT
            members.remove(value)
            row[field] = members
            row["updated_at"] = now_iso()
            return SetUpdate.REMOVED
