"""Error-handling decorators shared by the storage adapters."""

import asyncio
import functools
from typing import Any, Callable, TypeVar

import asyncpg
import redis.exceptions

from shortlink.exceptions import CacheUnavailableError, DurableStoreError

__all__ = ["handle_database_error", "degrade_on_cache_error"]

F = TypeVar("F", bound=Callable[..., Any])

DATABASE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)
CACHE_ERRORS = (redis.exceptions.RedisError, OSError, CacheUnavailableError)


def handle_database_error(method: F) -> F:
    """Wrap durable store methods so driver failures raise DurableStoreError.

    Example:
        >>> @handle_database_error
        ... async def lookup(self, slug):
        ...     ...
    """

    @functools.wraps(method)
    async def wrapper(self, *args, **kwargs):
        try:
            return await method(self, *args, **kwargs)
        except DATABASE_ERRORS as e:
            self.logger.error(f"Database error in {method.__name__}: {e}")
            raise DurableStoreError(
                f"Can't reach the database at {self.host}:{self.port}/{self.database}."
            ) from e

    return wrapper


def degrade_on_cache_error(default: Any = None) -> Callable[[F], F]:
    """Wrap cache methods so failures are logged and turned into ``default``.

    The durable store stays the source of truth, so a cache outage only
    costs latency.

    Example:
        >>> @degrade_on_cache_error(default=False)
        ... async def exists(self, slug):
        ...     ...
    """

    def decorator(method: F) -> F:
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except CACHE_ERRORS as e:
                self.logger.error(f"Cache {method.__name__} error: {e}")
                return default

        return wrapper

    return decorator
