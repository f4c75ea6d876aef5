"""Tests for shared/repository.py."""

from datetime import datetime

from shared.repository import BaseRepository
from shared.store import InMemoryDocumentStore


class TestBaseRepository:
    def test_holds_store(self):
        store = InMemoryDocumentStore()
        repo = BaseRepository(store)
        assert repo._store is store

    def test_new_id_is_unique_hex(self):
        first, second = BaseRepository.new_id(), BaseRepository.new_id()
        assert first != second
        assert len(first) == 32
        int(first, 16)

    def test_now_is_utc_iso(self):
        parsed = datetime.fromisoformat(BaseRepository.now())
        assert parsed.utcoffset().total_seconds() == 0
