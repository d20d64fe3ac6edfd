"""Storage layer for shortlink."""

from .base import URLRecordStoreBase, URLCacheBase
from .models import URLRecord
from .postgres import URLRecordPostgresStore
from .cache import RedisCache
from .coordinator import PersistenceCoordinator
from .reaper import ExpiredRecordReaper

__all__ = [
    "URLRecordStoreBase",
    "URLCacheBase",
    "URLRecord",
    "URLRecordPostgresStore",
    "RedisCache",
    "PersistenceCoordinator",
    "ExpiredRecordReaper",
]
