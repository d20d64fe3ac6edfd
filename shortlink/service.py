"""Business logic service for shortlink."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional
from datetime import datetime, timedelta, timezone

from .slug import SlugGenerator
from .exceptions import InvalidInputError, SlugConflictError
from .storage.coordinator import PersistenceCoordinator
from .storage.models import URLRecord
from .common.validators import is_valid_url, is_valid_slug


class URLShortenerService:
    """Service layer for creating and resolving short links."""

    def __init__(
        self,
        persistence: PersistenceCoordinator,
        slug_generator: Optional[SlugGenerator] = None,
        default_expire_days: int = 1,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shortlink service.

        Args:
            persistence: Coordinator over the durable store and the cache
            slug_generator: Optional slug generator
            default_expire_days: Lifetime of links created without an expiry
            logger: Optional logger
        """
        self.persistence = persistence
        self.generator = slug_generator or SlugGenerator()
        self.default_expire_days = default_expire_days
        self.logger = logger or logging.getLogger(__name__)
        # One lock per slug being created in this process, dropped once the
        # last waiter leaves. Other processes are kept out by the durable
        # store's primary key.
        self._slug_locks: Dict[str, asyncio.Lock] = {}
        self._slug_lock_users: Dict[str, int] = {}

    async def create_short_url(
        self,
        target_url: str,
        slug: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> str:
        """Create a new short link.

        Args:
            target_url: The destination URL
            slug: Optional caller-chosen slug; generated when empty
            expires_at: Optional expiry; defaults to now + default_expire_days

        Returns:
            The assigned slug

        Raises:
            InvalidInputError: If the URL or slug is invalid
            SlugConflictError: If the caller-chosen slug is already taken
            DurableStoreError: If the durable store fails
        """
        is_valid, error = is_valid_url(target_url)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

        if slug:
            is_valid, error = is_valid_slug(slug)
            if not is_valid:
                raise InvalidInputError(f"Invalid slug: {error}")

        if expires_at is None:
            expires_at = datetime.now(timezone.utc) + timedelta(days=self.default_expire_days)

        if slug:
            if not await self._save(URLRecord(slug=slug, target_url=target_url, expires_at=expires_at)):
                raise SlugConflictError("Please choose another short slug or leave it empty")
        else:
            slug = await self._create_with_generated_slug(target_url, expires_at)

        self.logger.info(f"Created short URL: {slug} -> {target_url}")
        return slug

    async def resolve(self, slug: str) -> Optional[str]:
        """Get the target URL for a slug.

        Reads never wait on creation locks.

        Args:
            slug: The slug to resolve

        Returns:
            Target URL or None if not found or expired
        """
        target_url = await self.persistence.lookup(slug)
        if target_url is None:
            self.logger.debug(f"Slug not found: {slug}")
        return target_url

    async def health_check(self):
        """Perform health check of both storage tiers."""
        return await self.persistence.health_check()

    @asynccontextmanager
    async def _slug_lock(self, slug: str):
        """Hold the creation lock for one slug."""
        lock = self._slug_locks.setdefault(slug, asyncio.Lock())
        self._slug_lock_users[slug] = self._slug_lock_users.get(slug, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._slug_lock_users[slug] -= 1
            if not self._slug_lock_users[slug]:
                del self._slug_lock_users[slug]
                del self._slug_locks[slug]

    async def _save(self, record: URLRecord) -> bool:
        async with self._slug_lock(record.slug):
            return await self.persistence.save(record)

    async def _create_with_generated_slug(self, target_url: str, expires_at: datetime) -> str:
        """Generate slugs until one is saved.

        The existence probe skips candidates already in use without touching
        the lock; a candidate that loses a race at save time is replaced.
        Unbounded: the keyspace is far larger than the number of live links,
        so this almost always returns on the first try.
        """
        attempts = 0
        while True:
            attempts += 1
            slug = self.generator.generate()
            if await self.persistence.exists(slug):
                self.logger.debug(f"Generated slug collision: {slug}")
                continue

            if await self._save(URLRecord(slug=slug, target_url=target_url, expires_at=expires_at)):
                if attempts > 1:
                    self.logger.debug(f"Generated slug after {attempts} attempts: {slug}")
                return slug
            self.logger.debug(f"Generated slug taken before save: {slug}")

    async def close(self) -> None:
        """Close both storage tiers."""
        await self.persistence.close()
