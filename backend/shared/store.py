"""
Document store abstraction.

Repositories talk to an IDocumentStore instead of a concrete database client,
so scoping and resolution logic can be exercised without a live database.

Filters are plain dicts mapping a field name to either a literal value
(equality) or one of the markers below.
"""

import copy
import threading
from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from .exceptions import DuplicateKeyError


class _Missing:
    """Matches a field that is absent or null."""

    def __repr__(self) -> str:
        return "MISSING"


class _Present:
    """Matches a field that is set to a non-empty value."""

    def __repr__(self) -> str:
        return "PRESENT"


MISSING = _Missing()
PRESENT = _Present()


@dataclass(frozen=True)
class In:
    """Matches a field whose value is one of `values`."""

    values: tuple[Any, ...]


@dataclass(frozen=True)
class NotEqual:
    """Matches a field whose value differs from `value` (absent counts as different)."""

    value: Any


Filters = dict[str, Any]


@runtime_checkable
class IDocumentStore(Protocol):
    """
    Interface for the backing document store.

    All methods are synchronous; the store is the only coordination point
    between concurrent requests.
    """

    def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Return all documents matching every filter."""
        ...

    def find_one(self, collection: str, filters: Filters) -> Optional[dict[str, Any]]:
        """Return the first matching document, or None."""
        ...

    def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a document and return it as stored.

        Raises:
            DuplicateKeyError: If a unique field collides with an existing document
        """
        ...

    def update(
        self,
        collection: str,
        filters: Filters,
        values: dict[str, Any],
    ) -> list[dict[str, Any]]:
        """Set `values` on every matching document and return the updated documents."""
        ...

    def delete(self, collection: str, filters: Filters) -> int:
        """Delete matching documents and return how many were removed."""
        ...

    def ensure_unique(self, collection: str, field: str) -> None:
        """Declare `field` unique within `collection`."""
        ...

    def ping(self) -> bool:
        """Return True if the store is reachable."""
        ...


def matches(document: dict[str, Any], filters: Optional[Filters]) -> bool:
    """Evaluate `filters` against a single document."""
    for field, expected in (filters or {}).items():
        actual = document.get(field)
        if expected is MISSING:
            if actual is not None:
                return False
        elif expected is PRESENT:
            if actual is None or actual == "":
                return False
        elif isinstance(expected, In):
            if actual not in expected.values:
                return False
        elif isinstance(expected, NotEqual):
            if actual == expected.value:
                return False
        elif actual != expected:
            return False
    return True


class InMemoryDocumentStore(IDocumentStore):
    """
    In-memory document store for development and tests.

    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store. A lock serializes writes, which gives the
    same insert-or-conflict behaviour as a unique index.
    """

    def __init__(self) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {}
        self._unique: dict[str, set[str]] = {}
        self._sequence = 0
        self._lock = threading.RLock()

    def ensure_unique(self, collection: str, field: str) -> None:
        with self._lock:
            self._unique.setdefault(collection, set()).add(field)

    def ping(self) -> bool:
        return True

    def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        with self._lock:
            docs = [d for d in self._collections.get(collection, []) if matches(d, filters)]
            if order_by:
                # Insertion sequence breaks ties so equal timestamps keep a stable order
                docs.sort(
                    key=lambda d: (d.get(order_by) is not None, d.get(order_by) or "", d["_seq"]),
                    reverse=descending,
                )
            if limit is not None:
                docs = docs[:limit]
            return [self._export(d) for d in docs]

    def find_one(self, collection: str, filters: Filters) -> Optional[dict[str, Any]]:
        found = self.find(collection, filters, limit=1)
        return found[0] if found else None

    def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        with self._lock:
            docs = self._collections.setdefault(collection, [])
            self._check_unique(collection, docs, document)
            self._sequence += 1
            stored = copy.deepcopy(document)
            stored["_seq"] = self._sequence
            docs.append(stored)
            return self._export(stored)

    def update(
        self,
        collection: str,
        filters: Filters,
        values: dict[str, Any],
    ) -> list[dict[str, Any]]:
        with self._lock:
            docs = self._collections.get(collection, [])
            targets = [d for d in docs if matches(d, filters)]
            for doc in targets:
                candidate = {**doc, **values}
                others = [d for d in docs if d is not doc]
                self._check_unique(collection, others, candidate)
            for doc in targets:
                doc.update(copy.deepcopy(values))
            return [self._export(d) for d in targets]

    def delete(self, collection: str, filters: Filters) -> int:
        with self._lock:
            docs = self._collections.get(collection, [])
            keep = [d for d in docs if not matches(d, filters)]
            removed = len(docs) - len(keep)
            self._collections[collection] = keep
            return removed

    def _check_unique(
        self,
        collection: str,
        existing: list[dict[str, Any]],
        document: dict[str, Any],
    ) -> None:
        for field in self._unique.get(collection, set()):
            value = document.get(field)
            if value is None:
                continue
            if any(d.get(field) == value for d in existing):
                raise DuplicateKeyError(collection, field, value)

    @staticmethod
    def _export(document: dict[str, Any]) -> dict[str, Any]:
        exported = copy.deepcopy(document)
        exported.pop("_seq", None)
        return exported
