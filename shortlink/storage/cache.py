"""Redis cache layer for shortlink."""

import json
import logging
from typing import Optional
from datetime import datetime, timezone

import redis.asyncio as redis
from redis.exceptions import RedisError

from shortlink.exceptions import CacheUnavailableError
from .base import URLCacheBase
from .helpers import degrade_on_cache_error
from .models import URLRecord


class RedisCache(URLCacheBase):
    """Redis cache for URL records.

    Entries expire with their record, so a hit never needs an expiry check.
    Every operation degrades to a miss when Redis is unreachable.
    """

    def __init__(
        self,
        redis_url: str,
        key_prefix: str = "",
        client: Optional[redis.Redis] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Optional namespace prepended to every slug key
            client: Pre-initialized client (otherwise created by connect())
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    async def connect(self) -> None:
        """Connect to Redis.

        A failed ping is logged only: the cache keeps degrading to misses
        until Redis comes back.
        """
        if self.client is None:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        try:
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis: {e}")

    def _redis(self) -> redis.Redis:
        if self.client is None:
            raise CacheUnavailableError("Redis client is not connected")
        return self.client

    def get_cache_key(self, slug: str) -> str:
        """Generate cache key for a slug."""
        return f"{self.key_prefix}{slug}"

    @degrade_on_cache_error(default=None)
    async def save(self, record: URLRecord) -> None:
        """Cache a record with a TTL ending at its expiry.

        Args:
            record: The record to cache
        """
        ttl_ms = int((record.expires_at - datetime.now(timezone.utc)).total_seconds() * 1000)
        if ttl_ms <= 0:
            self.logger.debug(f"Not caching expired slug: {record.slug}")
            return

        await self._redis().set(
            self.get_cache_key(record.slug),
            json.dumps(record.to_dict()),
            px=ttl_ms,
        )

    @degrade_on_cache_error(default=None)
    async def lookup(self, slug: str) -> Optional[URLRecord]:
        """Get a cached record.

        Args:
            slug: The slug to lookup

        Returns:
            Cached record or None
        """
        value = await self._redis().get(self.get_cache_key(slug))
        if value is None:
            return None

        try:
            return URLRecord.from_dict(json.loads(value))
        except (ValueError, KeyError, TypeError) as e:
            self.logger.warning(f"Ignoring undecodable cache entry for {slug}: {e}")
            return None

    @degrade_on_cache_error(default=False)
    async def exists(self, slug: str) -> bool:
        """Check if a slug is cached."""
        return await self._redis().exists(self.get_cache_key(slug)) == 1

    async def health_check(self) -> bool:
        """Ping Redis."""
        try:
            await self._redis().ping()
            return True
        except (RedisError, OSError, CacheUnavailableError) as e:
            self.logger.error(f"Cache health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
