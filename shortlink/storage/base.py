"""Abstract base classes for the two shortlink storage tiers."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import URLRecord


class URLRecordStoreBase(ABC):
    """Durable, strongly-consistent store of URL records.

    Rows may outlive their expiry until the reaper runs, so every read must
    filter on ``expires_at > now``.
    """

    @abstractmethod
    async def save(self, record: URLRecord) -> bool:
        """Insert a record unless its slug is held by a live row.

        Implementations first drop an already-expired row for the slug (the
        reaper may not have run yet), then insert atomically against the
        slug's uniqueness constraint.

        Args:
            record: The record to insert

        Returns:
            True if created, False if a live row for the slug exists

        Raises:
            DurableStoreError: If the store can't be reached
        """
        pass

    @abstractmethod
    async def lookup(self, slug: str) -> Optional[URLRecord]:
        """Get the live record for a slug.

        Args:
            slug: The slug to lookup

        Returns:
            The record if found and not expired, None otherwise

        Raises:
            DurableStoreError: If the store can't be reached
        """
        pass

    async def exists(self, slug: str) -> bool:
        """Check if a live record exists for a slug."""
        return await self.lookup(slug) is not None

    @abstractmethod
    async def delete_expired(self) -> int:
        """Delete every row whose expiry has passed.

        Returns:
            Number of deleted rows

        Raises:
            DurableStoreError: If the store can't be reached
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connections. Safe to call more than once."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is healthy."""
        pass


class URLCacheBase(ABC):
    """Volatile store of URL records with native TTL eviction.

    A cached record is always live: the entry is evicted at ``expires_at``.
    Implementations never raise on connectivity problems; they log and
    behave as a miss.
    """

    @abstractmethod
    async def save(self, record: URLRecord) -> None:
        """Cache a record until its expiry."""
        pass

    @abstractmethod
    async def lookup(self, slug: str) -> Optional[URLRecord]:
        """Get a cached record, or None on miss."""
        pass

    @abstractmethod
    async def exists(self, slug: str) -> bool:
        """Check if a slug is cached."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the cache connection."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the cache is reachable."""
        pass
