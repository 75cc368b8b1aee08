"""
Unit tests for TickScheduler.
"""

import pytest
import asyncio
from recruitdesk.scheduler import TickScheduler


class TestTickScheduler:
    """Test cases for TickScheduler."""

    @pytest.mark.asyncio
    async def test_runs_immediately_and_stops(self):
        calls = []

        async def job():
            calls.append(1)

        scheduler = TickScheduler(job, interval_seconds=60)
        scheduler.start()
        await asyncio.sleep(0.05)
        scheduler.stop()
        await asyncio.wait_for(scheduler.wait(), timeout=1)

        assert calls == [1]
        assert scheduler.stats["successful_runs"] == 1
        assert scheduler.running is False

    @pytest.mark.asyncio
    async def test_runs_repeatedly(self):
        calls = []

        async def job():
            calls.append(1)

        scheduler = TickScheduler(job, interval_seconds=0.05)
        scheduler.start()
        await asyncio.sleep(0.18)
        scheduler.stop()
        await asyncio.wait_for(scheduler.wait(), timeout=1)

        assert 2 <= len(calls) <= 5

    @pytest.mark.asyncio
    async def test_runs_never_overlap(self):
        active = 0
        peak = 0

        async def slow_job():
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.05)
            active -= 1

        scheduler = TickScheduler(slow_job, interval_seconds=0.01)
        scheduler.start()
        await asyncio.sleep(0.2)
        scheduler.stop()
        await asyncio.wait_for(scheduler.wait(), timeout=1)

        assert peak == 1

    @pytest.mark.asyncio
    async def test_failed_run_is_counted_not_raised(self):
        async def job():
            raise RuntimeError("boom")

        scheduler = TickScheduler(job, interval_seconds=60)
        scheduler.start()
        await asyncio.sleep(0.05)
        scheduler.stop()
        await asyncio.wait_for(scheduler.wait(), timeout=1)

        assert scheduler.stats["failed_runs"] == 1
        assert scheduler.stats["last_error"] == "boom"
        assert scheduler.get_health()["status"] == "unhealthy"

    @pytest.mark.asyncio
    async def test_no_run_after_stop_during_run(self):
        calls = []
        scheduler = None

        async def job():
            calls.append(1)
            scheduler.stop()

        scheduler = TickScheduler(job, interval_seconds=0.01)
        scheduler.start()
        await asyncio.wait_for(scheduler.wait(), timeout=1)
        await asyncio.sleep(0.05)

        assert calls == [1]

    @pytest.mark.asyncio
    async def test_health(self):
        async def job():
            pass

        scheduler = TickScheduler(job, interval_seconds=60)
        assert scheduler.get_health()["status"] == "unhealthy"
        scheduler.start()
        await asyncio.sleep(0.05)
        assert scheduler.get_health()["status"] == "healthy"
        scheduler.stop()
        await scheduler.wait()
