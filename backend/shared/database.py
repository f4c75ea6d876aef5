"""
Database client factory and document store implementations.

Provides the service-role Supabase client (backend operations bypass RLS;
tenant scoping is enforced by the services) and the store factory used by
the service container.
"""

import logging
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import create_client, Client

from .config import Settings, get_settings
from .exceptions import DuplicateKeyError
from .store import (
    MISSING,
    PRESENT,
    Filters,
    IDocumentStore,
    In,
    InMemoryDocumentStore,
    NotEqual,
)

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None


class SupabaseDocumentStore(IDocumentStore):
    """
    Document store backed by Supabase (PostgREST) tables.

    Unique fields are enforced by the table schema (see migrations/), so
    ensure_unique() is a no-op here.
    """

    def __init__(self, db: Client) -> None:
        self._db = db

    def ensure_unique(self, collection: str, field: str) -> None:
        return None

    def ping(self) -> bool:
        try:
            self._db.table("widget_configs").select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase ping failed: {e}")
            return False

    def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        query = self._apply_filters(self._db.table(collection).select("*"), filters)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        result = query.execute()
        return list(result.data or [])

    def find_one(self, collection: str, filters: Filters) -> Optional[dict[str, Any]]:
        found = self.find(collection, filters, limit=1)
        return found[0] if found else None

    def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        try:
            result = self._db.table(collection).insert(document).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateKeyError(collection, "unique", e.details or e.message)
            raise
        return result.data[0]

    def update(
        self,
        collection: str,
        filters: Filters,
        values: dict[str, Any],
    ) -> list[dict[str, Any]]:
        query = self._apply_filters(self._db.table(collection).update(values), filters)
        try:
            result = query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateKeyError(collection, "unique", e.details or e.message)
            raise
        return list(result.data or [])

    def delete(self, collection: str, filters: Filters) -> int:
        result = self._apply_filters(self._db.table(collection).delete(), filters).execute()
        return len(result.data or [])

    @staticmethod
    def _apply_filters(query: Any, filters: Optional[Filters]) -> Any:
        for field, expected in (filters or {}).items():
            if expected is MISSING:
                query = query.is_(field, "null")
            elif expected is PRESENT:
                query = query.not_.is_(field, "null").neq(field, "")
            elif isinstance(expected, In):
                query = query.in_(field, list(expected.values))
            elif isinstance(expected, NotEqual):
                query = query.or_(f"{field}.neq.\"{expected.value}\",{field}.is.null")
            else:
                query = query.eq(field, expected)
        return query


def get_document_store(settings: Optional[Settings] = None) -> IDocumentStore:
    """
    Create the document store selected by settings.store_backend.

    Args:
        settings: Settings to use (defaults to the cached application settings)

    Returns:
        SupabaseDocumentStore for "supabase", InMemoryDocumentStore for "memory"
    """
    settings = settings or get_settings()
    if settings.store_backend == "memory":
        logger.warning("Using in-memory document store; data will not be persisted")
        return InMemoryDocumentStore()
    return SupabaseDocumentStore(get_supabase_client())
