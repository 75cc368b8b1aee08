"""
Asyncio scheduler for periodic jobs with clean cancellation.
"""

from __future__ import annotations
import asyncio
import time
from typing import Any, Awaitable, Callable, Optional
from recruitdesk.logging import logger


class TickScheduler:
    """
    Runs an async job once immediately and then every `interval_seconds`.

    Runs never overlap: the next run starts `interval - elapsed` seconds
    after the previous one started, or right away if it overran.
    `stop()` cancels the pending wait; a run already in progress finishes
    on its own and no further run starts.
    """

    def __init__(
        self,
        job: Callable[[], Awaitable[Any]],
        interval_seconds: float = 60.0,
        name: str = "scheduler",
    ) -> None:
        """
        Initialize scheduler.

        Args:
            job: Coroutine function to execute on each run
            interval_seconds: Interval between run starts in seconds
            name: Label used in log lines
        """
        self.job = job
        self.interval_seconds = interval_seconds
        self.name = name
        self.running = False
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self.stats = {
            "runs": 0,
            "successful_runs": 0,
            "failed_runs": 0,
            "last_run_time": None,
            "last_success_time": None,
            "last_error": None,
        }

    async def _run_job(self) -> None:
        """Execute the job; failures are logged and counted, never raised."""
        start_time = time.time()
        try:
            await self.job()
            self.stats["successful_runs"] += 1
            self.stats["last_success_time"] = time.time()
            self.stats["last_error"] = None
        except Exception as e:
            self.stats["failed_runs"] += 1
            self.stats["last_error"] = str(e)
            logger.exception(f"{self.name} run failed after {time.time() - start_time:.2f}s: {e}")
        finally:
            self.stats["runs"] += 1
            self.stats["last_run_time"] = time.time()

    async def _loop(self, stop_event: asyncio.Event) -> None:
        logger.info(f"{self.name} started with interval {self.interval_seconds}s")
        while not stop_event.is_set():
            started = time.monotonic()
            await self._run_job()
            if stop_event.is_set():
                break
            delay = max(0.0, self.interval_seconds - (time.monotonic() - started))
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                pass
        logger.info(f"{self.name} loop ended")

    def start(self) -> None:
        """Start the loop as a task on the running event loop."""
        if self.running:
            logger.warning(f"{self.name} is already running")
            return

        self.running = True
        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(self._loop(self._stop_event))

    def stop(self) -> None:
        """Cancel the schedule. Safe to call more than once."""
        if not self.running:
            return

        logger.info(f"Stopping {self.name}...")
        self.running = False
        if self._stop_event is not None:
            self._stop_event.set()

    async def wait(self) -> None:
        """Wait for the loop task to finish (after `stop()`)."""
        if self._task is not None:
            await self._task

    def get_health(self) -> dict:
        """
        Get health check information.

        Returns:
            Dictionary with health status and statistics
        """
        is_healthy = (
            self.running and
            self.stats["runs"] > 0 and
            self.stats["last_error"] is None
        )

        # Unhealthy if last run was more than 2 intervals ago
        if self.stats["last_run_time"]:
            if time.time() - self.stats["last_run_time"] > self.interval_seconds * 2:
                is_healthy = False

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "running": self.running,
            "stats": self.stats.copy(),
            "interval_seconds": self.interval_seconds,
        }
