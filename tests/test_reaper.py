"""Tests for the expired record reaper."""

import asyncio
from unittest.mock import AsyncMock
from datetime import datetime, timedelta, timezone

import pytest

from shortlink.storage.models import URLRecord
from shortlink.storage.reaper import ExpiredRecordReaper


def _add(durable, slug, delta):
    durable.rows[slug] = URLRecord(
        slug=slug,
        target_url="http://example.com",
        expires_at=datetime.now(timezone.utc) + delta,
    )


@pytest.mark.asyncio
class TestExpiredRecordReaper:
    """Test ExpiredRecordReaper."""

    async def test_run_once_deletes_expired(self, durable, logger):
        _add(durable, "old1", timedelta(minutes=-5))
        _add(durable, "old2", timedelta(days=-1))
        _add(durable, "live", timedelta(days=1))

        deleted = await ExpiredRecordReaper(durable, logger=logger).run_once()

        assert deleted == 2
        assert list(durable.rows) == ["live"]

    async def test_run_once_failure(self, durable, logger):
        """A failed sweep is logged and counts as zero."""
        durable.fail = True

        assert await ExpiredRecordReaper(durable, logger=logger).run_once() == 0

    async def test_start_sweeps_immediately(self, durable, logger):
        _add(durable, "old", timedelta(minutes=-5))
        reaper = ExpiredRecordReaper(durable, interval_seconds=3600, logger=logger)

        reaper.start()
        for _ in range(3):
            await asyncio.sleep(0)

        assert reaper.running
        assert durable.reap_calls == 1
        assert "old" not in durable.rows

        await reaper.stop()
        assert not reaper.running

    async def test_sweeps_repeat(self, durable, logger):
        reaper = ExpiredRecordReaper(durable, interval_seconds=0.01, logger=logger)

        reaper.start()
        await asyncio.sleep(0.1)
        await reaper.stop()

        assert durable.reap_calls > 1

    async def test_keeps_running_after_failure(self, durable, logger):
        durable.fail = True
        reaper = ExpiredRecordReaper(durable, interval_seconds=0.01, logger=logger)

        reaper.start()
        await asyncio.sleep(0.05)

        assert reaper.running
        await reaper.stop()

    async def test_keeps_running_after_unexpected_error(self, durable, logger):
        """Errors other than store failures don't end the loop or leak into stop()."""
        durable.delete_expired = AsyncMock(side_effect=RuntimeError("unexpected"))
        reaper = ExpiredRecordReaper(durable, interval_seconds=0.01, logger=logger)

        reaper.start()
        await asyncio.sleep(0.05)

        assert reaper.running
        assert durable.delete_expired.await_count > 1
        await reaper.stop()
        assert not reaper.running

    async def test_start_twice(self, durable, logger):
        reaper = ExpiredRecordReaper(durable, interval_seconds=3600, logger=logger)

        reaper.start()
        task = reaper._task
        reaper.start()

        assert reaper._task is task
        await reaper.stop()

    async def test_stop_idempotent(self, durable, logger):
        reaper = ExpiredRecordReaper(durable, logger=logger)

        await reaper.stop()
        reaper.start()
        await reaper.stop()
        await reaper.stop()

        assert not reaper.running
