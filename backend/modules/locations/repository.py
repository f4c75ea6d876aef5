"""
Location repository for document store access.

Encapsulates all queries against the locations collection.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

from .models import Location


class LocationRepository(BaseRepository[Location]):
    """
    Repository for location records.

    Note: This repository does NOT perform scope checks.
    The service layer is responsible for verifying tenant/component access.
    """

    collection = "locations"

    def list(self, filters: dict[str, Any]) -> list[Location]:
        """Matching locations, newest first."""
        docs = self._store.find(self.collection, filters, order_by="created_at", descending=True)
        return [Location.model_validate(doc) for doc in docs]

    def get_by_id(self, location_id: str) -> Optional[Location]:
        doc = self._store.find_one(self.collection, {"id": location_id})
        return Location.model_validate(doc) if doc else None

    def create(self, data: dict[str, Any]) -> Location:
        now = self.now()
        doc = {**data, "id": self.new_id(), "created_at": now, "updated_at": now}
        return Location.model_validate(self._store.insert(self.collection, doc))

    def update(self, location_id: str, values: dict[str, Any]) -> Optional[Location]:
        docs = self._store.update(
            self.collection,
            {"id": location_id},
            {**values, "updated_at": self.now()},
        )
        return Location.model_validate(docs[0]) if docs else None

    def delete(self, location_id: str) -> bool:
        return self._store.delete(self.collection, {"id": location_id}) > 0
