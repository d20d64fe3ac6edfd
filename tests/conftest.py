"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from shortlink.service import URLShortenerService
from shortlink.slug import SlugGenerator
from shortlink.storage.coordinator import PersistenceCoordinator
from shortlink.storage.models import URLRecord
from shortlink.common.logging_config import setup_logging
from tests.fakes import InMemoryCache, InMemoryURLRecordStore


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def durable():
    """Create in-memory durable store."""
    return InMemoryURLRecordStore()


@pytest.fixture
def cache():
    """Create in-memory cache."""
    return InMemoryCache()


@pytest.fixture
def persistence(durable, cache, logger):
    """Create coordinator over the in-memory stores."""
    return PersistenceCoordinator(durable=durable, cache=cache, logger=logger)


@pytest.fixture
def slug_generator():
    """Create slug generator."""
    return SlugGenerator(length=6)


@pytest.fixture
def service(persistence, slug_generator, logger):
    """Create service instance."""
    return URLShortenerService(
        persistence=persistence,
        slug_generator=slug_generator,
        default_expire_days=1,
        logger=logger,
    )


@pytest.fixture
def record():
    """A record that expires tomorrow."""
    return URLRecord(
        slug="test-short-slug",
        target_url="http://very-long-real-url.com",
        expires_at=datetime.now(timezone.utc) + timedelta(days=1),
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
