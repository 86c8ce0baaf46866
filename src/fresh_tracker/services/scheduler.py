"""Daily scheduler for the expiration sweep."""

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from datetime import datetime

import schedule

from fresh_tracker.services.sweep import ExpirationSweep, SweepReport

logger = logging.getLogger(__name__)


@dataclass
class SweepScheduler:
    """Fires the expiration sweep once a day at a fixed local time.

    The `schedule` job table is polled from an asyncio task created by
    `start()`. A trigger that fires while a sweep is still running is
    skipped.
    """

    sweep: ExpirationSweep
    run_at: str = "09:00"
    poll_seconds: float = 30.0
    last_report: SweepReport | None = field(default=None, init=False)
    _jobs: schedule.Scheduler = field(default_factory=schedule.Scheduler, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)
    _poll_task: asyncio.Task[None] | None = field(default=None, init=False)
    _run_task: asyncio.Task[SweepReport | None] | None = field(
        default=None, init=False
    )

    @property
    def started(self) -> bool:
        return self._poll_task is not None

    @property
    def is_running(self) -> bool:
        """Return True while a sweep is in progress."""
        return self._lock.locked()

    @property
    def next_run(self) -> datetime | None:
        """Return the next scheduled trigger, if started."""
        if not self._jobs.jobs:
            return None
        return self._jobs.next_run

    def start(self) -> None:
        """Register the daily job and begin polling; must run inside an event loop."""
        if self._poll_task is not None:
            return
        self._jobs.clear()
        self._jobs.every().day.at(self.run_at).do(self.trigger)
        self._poll_task = asyncio.get_running_loop().create_task(self._poll())
        logger.info("Scheduler started (running daily at %s)", self.run_at)

    async def stop(self) -> None:
        """Stop polling and cancel an in-flight sweep."""
        for task in (self._poll_task, self._run_task):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
        self._poll_task = None
        self._run_task = None
        self._jobs.clear()
        logger.info("Scheduler stopped")

    async def run_now(self) -> SweepReport | None:
        """Run a sweep immediately unless one is already in progress."""
        if self._lock.locked():
            logger.warning("Sweep already running; skipping this trigger")
            return None
        async with self._lock:
            report = await self.sweep.run()
            self.last_report = report
            return report

    async def _poll(self) -> None:
        while True:
            self._jobs.run_pending()
            await asyncio.sleep(self.poll_seconds)

    def trigger(self) -> None:
        """Start a sweep in the background unless one is already running."""
        if self._run_task is not None and not self._run_task.done():
            logger.warning("Sweep already running; skipping this trigger")
            return
        self._run_task = asyncio.get_running_loop().create_task(self.run_now())
