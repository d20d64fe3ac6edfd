"""In-memory storage doubles for tests."""

import asyncio
from datetime import datetime, timezone
from typing import Dict, Optional

from shortlink.exceptions import DurableStoreError
from shortlink.storage.base import URLCacheBase, URLRecordStoreBase
from shortlink.storage.models import URLRecord


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryURLRecordStore(URLRecordStoreBase):
    """Durable store double.

    Keeps expired rows around until ``delete_expired`` runs, like a real
    table between reaper sweeps.
    """

    def __init__(self):
        self.rows: Dict[str, URLRecord] = {}
        self.fail = False
        self.closed = False
        self.close_error: Optional[Exception] = None
        self.save_calls = 0
        self.lookup_calls = 0
        self.reap_calls = 0

    def _check(self):
        if self.fail:
            raise DurableStoreError("database unavailable")

    async def save(self, record: URLRecord) -> bool:
        self.save_calls += 1
        # let other tasks run, as a network round trip would
        await asyncio.sleep(0)
        self._check()
        existing = self.rows.get(record.slug)
        if existing is not None and existing.is_expired():
            del self.rows[record.slug]
        if record.slug in self.rows:
            return False
        self.rows[record.slug] = record
        return True

    async def lookup(self, slug: str) -> Optional[URLRecord]:
        self.lookup_calls += 1
        await asyncio.sleep(0)
        self._check()
        record = self.rows.get(slug)
        if record is None or record.is_expired():
            return None
        return record

    async def delete_expired(self) -> int:
        self.reap_calls += 1
        self._check()
        expired = [slug for slug, record in self.rows.items() if record.is_expired()]
        for slug in expired:
            del self.rows[slug]
        return len(expired)

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error

    async def health_check(self) -> bool:
        return not self.fail


class InMemoryCache(URLCacheBase):
    """Cache double that evicts entries at their expiry, like a Redis TTL."""

    def __init__(self):
        self.entries: Dict[str, URLRecord] = {}
        self.closed = False
        self.close_error: Optional[Exception] = None

    def _live(self, slug: str) -> Optional[URLRecord]:
        record = self.entries.get(slug)
        if record is not None and record.is_expired():
            del self.entries[slug]
            return None
        return record

    def flush(self) -> None:
        self.entries.clear()

    async def save(self, record: URLRecord) -> None:
        await asyncio.sleep(0)
        if not record.is_expired():
            self.entries[record.slug] = record

    async def lookup(self, slug: str) -> Optional[URLRecord]:
        await asyncio.sleep(0)
        return self._live(slug)

    async def exists(self, slug: str) -> bool:
        await asyncio.sleep(0)
        return self._live(slug) is not None

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error

    async def health_check(self) -> bool:
        return True


class SequenceSlugGenerator:
    """Slug generator returning a fixed sequence of candidates."""

    def __init__(self, *slugs: str):
        self.slugs = list(slugs)

    def generate(self, length: Optional[int] = None) -> str:
        return self.slugs.pop(0)
