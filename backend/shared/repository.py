"""
Base repository class for data access.

Provides a common abstraction layer for all repositories, encapsulating
document store access and providing shared utilities for data operations.
"""

import uuid
from datetime import datetime, timezone
from typing import TypeVar, Generic

from .store import IDocumentStore


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for store operations:
    - Document store access via self._store
    - The collection name via self.collection
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class LocationRepository(BaseRepository[Location]):
            collection = "locations"

            def get_by_id(self, location_id: str) -> Optional[Location]:
                doc = self._store.find_one(self.collection, {"id": location_id})
                return Location.model_validate(doc) if doc else None
    """

    collection: str = ""

    def __init__(self, store: IDocumentStore) -> None:
        """
        Initialize the repository with a document store.

        Args:
            store: Document store instance for data operations.
        """
        self._store = store

    @staticmethod
    def new_id() -> str:
        """Generate a record id (store-agnostic)."""
        return uuid.uuid4().hex

    @staticmethod
    def now() -> str:
        """Current UTC timestamp in ISO format, as stored."""
        return datetime.now(timezone.utc).isoformat()
