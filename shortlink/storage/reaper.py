"""Background sweep of expired durable records."""

import asyncio
import logging
from typing import Optional

from shortlink.exceptions import DurableStoreError
from .base import URLRecordStoreBase

ONE_DAY_SECONDS = 86_400


class ExpiredRecordReaper:
    """Periodically delete expired rows from the durable store.

    Reads filter on expiry anyway; the sweep only keeps the table small and
    leaves the lazy delete in ``save`` with the short window between sweeps.
    """

    def __init__(
        self,
        store: URLRecordStoreBase,
        interval_seconds: float = ONE_DAY_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.interval_seconds = interval_seconds
        self.logger = logger or logging.getLogger(__name__)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Run a single sweep.

        Returns:
            Number of deleted rows (0 if the sweep failed)
        """
        try:
            return await self.store.delete_expired()
        except DurableStoreError as e:
            self.logger.error(f"Expired record sweep failed: {e}")
            return 0

    async def _run(self) -> None:
        while True:
            try:
                await self.run_once()
            except Exception:
                self.logger.exception("Unexpected error during expired record sweep")
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        """Start sweeping in the background. Needs a running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())
        self.logger.info(f"Reaper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the background sweep. Safe to call more than once."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self.logger.info("Reaper stopped")
