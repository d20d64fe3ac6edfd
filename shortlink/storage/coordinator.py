"""Two-tier persistence: durable store of record + TTL cache in front of it.

Reads are cache-aside, writes are write-through. The coordinator is the only
component that answers "is this slug taken" and "where does it point".

Ordering rules:
    - save: a cached slug is always live, so a cache hit is an immediate
      duplicate. A cache miss proves nothing (Redis may have evicted a live
      entry under memory pressure), so the durable store decides. Only a
      successful durable insert is mirrored into the cache; a failed cache
      write never undoes it.
    - lookup: cache first, trusted without an expiry check. On a miss the
      durable store (already expiry-filtered) is asked and a hit is copied
      back into the cache.
    - exists: either tier. Only used to probe generated candidates; save
      still performs its own authoritative checks.

Durable store errors propagate. Cache errors never reach this module, the
cache adapter turns them into misses.
"""

import logging
from typing import Dict, Optional

from .base import URLCacheBase, URLRecordStoreBase
from .models import URLRecord


class PersistenceCoordinator:
    """Compose a durable store and a cache behind one save/lookup API."""

    def __init__(
        self,
        durable: URLRecordStoreBase,
        cache: URLCacheBase,
        logger: Optional[logging.Logger] = None,
    ):
        self.durable = durable
        self.cache = cache
        self.logger = logger or logging.getLogger(__name__)

    async def save(self, record: URLRecord) -> bool:
        """Persist a record.

        Args:
            record: The record to persist; ``expires_at`` must already be set

        Returns:
            True if created, False if the slug is a duplicate

        Raises:
            DurableStoreError: If the durable store fails
        """
        if await self.cache.exists(record.slug):
            self.logger.debug(f"Duplicate slug (cache): {record.slug}")
            return False

        if not await self.durable.save(record):
            self.logger.debug(f"Duplicate slug (database): {record.slug}")
            return False

        # freshly created links are the most likely to be requested next
        await self.cache.save(record)
        return True

    async def lookup(self, slug: str) -> Optional[str]:
        """Resolve a slug to its target URL.

        Args:
            slug: The slug to resolve

        Returns:
            Target URL, or None if unknown or expired

        Raises:
            DurableStoreError: If the durable store fails on a cache miss
        """
        cached = await self.cache.lookup(slug)
        if cached is not None:
            self.logger.debug(f"Cache hit for {slug}")
            return cached.target_url

        record = await self.durable.lookup(slug)
        if record is None:
            return None

        self.logger.debug(f"Cache miss for {slug}, backfilling")
        await self.cache.save(record)
        return record.target_url

    async def exists(self, slug: str) -> bool:
        """Check whether a slug is live in either tier."""
        return await self.cache.exists(slug) or await self.durable.exists(slug)

    async def health_check(self) -> Dict[str, bool]:
        """Report the health of both tiers."""
        database = await self.durable.health_check()
        cache = await self.cache.health_check()
        return {
            "database": database,
            "cache": cache,
            "overall": database and cache,
        }

    async def close(self) -> None:
        """Close the cache, then the durable store.

        Both are always closed; the first failure is re-raised afterwards.
        """
        error = None
        for store in (self.cache, self.durable):
            try:
                await store.close()
            except Exception as e:
                self.logger.error(f"Error closing {type(store).__name__}: {e}")
                error = error or e
        if error is not None:
            raise error
