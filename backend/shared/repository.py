"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
document store access and providing shared utilities for data operations.
"""

from typing import Any, Generic, Optional, TypeVar

from .models import ListParams
from .store import Filter, IDocumentStore, now_iso


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Document store access via self._store
    - Generic CRUD over a single collection
    - Generic type parameter for model type hints

    Subclasses set `collection` and implement `_map()` to turn a stored
    row into their Pydantic model.

    Example:
        class EventRepository(BaseRepository[Event]):
            collection = "events"

            def _map(self, row: dict) -> Event:
                return Event.model_validate(row)

    Note: repositories do NOT perform authorization checks.
    The service layer is responsible for role and ownership decisions.
    """

    collection: str = ""

    def __init__(self, store: IDocumentStore) -> None:
        """
        Initialize the repository with a document store.

        Args:
            store: Document store instance for database operations.
        """
        self._store = store

    def _map(self, row: dict[str, Any]) -> T:
        raise NotImplementedError

    def get(self, doc_id: str) -> Optional[T]:
        row = self._store.get(self.collection, doc_id)
        return self._map(row) if row is not None else None

    def create(self, data: dict[str, Any]) -> T:
        now = now_iso()
        payload = {"created_at": now, "updated_at": now, **data}
        return self._map(self._store.insert(self.collection, payload))

    def update(self, doc_id: str, data: dict[str, Any]) -> Optional[T]:
        """Merge `data` into the stored row and stamp updated_at."""
        row = self._store.update(self.collection, doc_id, {**data, "updated_at": now_iso()})
        return self._map(row) if row is not None else None

    def delete(self, doc_id: str) -> bool:
        return self._store.delete(self.collection, doc_id)

    def list(
        self,
        params: ListParams,
        filters: Optional[list[Filter]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> tuple[list[T], int]:
        """
        Run one paginated query.

        Returns:
            (items on this page, total matching rows)
        """
        page = self._store.query(
            self.collection,
            filters=filters,
            order_by=order_by,
            descending=descending,
            offset=params.offset,
            limit=params.limit,
        )
        return [self._map(row) for row in page.items], page.total
