"""Tests for application startup and shutdown."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import app as app_module
from config import Config
from web_app import create_app
from tests.fakes import InMemoryCache, InMemoryURLRecordStore


@pytest.fixture
def stores(monkeypatch):
    """Swap the real stores built by the lifespan for in-memory ones."""
    durable = InMemoryURLRecordStore()
    durable.host, durable.port, durable.database = "localhost", 5432, "shortlink"
    cache = InMemoryCache()
    cache.connect = AsyncMock()
    monkeypatch.setattr(app_module, "URLRecordPostgresStore", lambda **kwargs: durable)
    monkeypatch.setattr(app_module, "RedisCache", lambda **kwargs: cache)
    return durable, cache


@pytest.fixture
def fastapi_app(logger):
    return create_app(service_instance=None, config=Config(_env_file=None), logger=logger)


@pytest.mark.asyncio
class TestLifespan:
    """Test the lifespan context."""

    async def test_startup_and_shutdown(self, stores, fastapi_app):
        durable, cache = stores

        async with app_module.lifespan(fastapi_app):
            service = fastapi_app.state.service
            assert await service.create_short_url("http://example.com", slug="kittens") == "kittens"
            cache.connect.assert_awaited_once()

        assert durable.closed
        assert cache.closed

    async def test_stores_closed_when_reaper_stop_fails(self, stores, fastapi_app, monkeypatch):
        durable, cache = stores
        reaper = MagicMock()
        reaper.stop = AsyncMock(side_effect=RuntimeError("unexpected"))
        monkeypatch.setattr(app_module, "ExpiredRecordReaper", lambda **kwargs: reaper)

        with pytest.raises(RuntimeError, match="unexpected"):
            async with app_module.lifespan(fastapi_app):
                reaper.start.assert_called_once()

        assert durable.closed
        assert cache.closed
