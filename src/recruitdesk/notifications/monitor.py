"""
Upcoming-interview monitor.

Every tick:
1) query the data source for interviews scheduled today
2) parse each interview time and compute minutes until start
3) alert once per (candidate, time) when 0 < minutes <= window
4) push the alert to the toast board and the system notifier

A tick never raises: data-source and processing errors are logged and the
tick simply produces no alerts.
"""

from __future__ import annotations
from datetime import datetime, time as dtime
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from recruitdesk.logging import logger
from recruitdesk.models.candidate import CandidateRecord
from recruitdesk.notifications.alerts import InterviewAlert, SystemNotifier, ToastBoard, alert_key
from recruitdesk.scheduler import TickScheduler
from recruitdesk.storage.local_state import AlertLedger, InMemoryAlertLedger
from recruitdesk.utils.timeparse import parse_time

DEFAULT_INTERVAL_SECONDS = 60
DEFAULT_WINDOW_MINUTES = 10


class CandidateSource(Protocol):
    async def fetch_interviews_between(self, start: datetime, end: datetime) -> Sequence[CandidateRecord]: ...


def local_now() -> datetime:
    return datetime.now().astimezone()


def day_bounds(now: datetime) -> Tuple[datetime, datetime]:
    """Start and end (inclusive) of the calendar day containing `now`."""
    start = datetime.combine(now.date(), dtime.min, tzinfo=now.tzinfo)
    end = datetime.combine(now.date(), dtime.max, tzinfo=now.tzinfo)
    return start, end


class InterviewMonitor:
    """
    Long-lived service raising lead-time alerts for today's interviews.

    All collaborators are injected (data source, ledger, clock, surfaces),
    so tests can drive `tick()` with a fake clock and a fake source.
    """

    def __init__(
        self,
        source: CandidateSource,
        ledger: Optional[AlertLedger] = None,
        toasts: Optional[ToastBoard] = None,
        notifier: Optional[SystemNotifier] = None,
        clock: Optional[Callable[[], datetime]] = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        window_minutes: int = DEFAULT_WINDOW_MINUTES,
    ) -> None:
        self.source = source
        self.ledger: AlertLedger = ledger if ledger is not None else InMemoryAlertLedger()
        self.toasts = toasts
        self.notifier = notifier
        self.clock = clock or local_now
        self.window_minutes = window_minutes
        self.scheduler = TickScheduler(self.tick, interval_seconds=interval_seconds, name="Interview monitor")
        self._stopped = False
        self._run = 0
        self.stats = {
            "ticks": 0,
            "alerts_sent": 0,
            "last_tick_found": 0,
            "last_tick_error": None,
        }

    # -----------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------
    def start(self) -> None:
        """Ask for notification permission (once) and start ticking."""
        if self.scheduler.running:
            logger.warning("Interview monitor is already running")
            return
        self._stopped = False
        self._run += 1
        if self.notifier is not None:
            self.notifier.request_permission()
        self.scheduler.start()
        logger.info("Interview monitor started")

    def stop(self) -> None:
        """Cancel further ticks and forget every alert raised so far."""
        if self._stopped:
            return
        self._stopped = True
        self._run += 1
        self.scheduler.stop()
        self.ledger.clear()
        logger.info("Interview monitor stopped")

    async def wait(self) -> None:
        await self.scheduler.wait()

    # -----------------------------------------------------------------
    # Tick
    # -----------------------------------------------------------------
    def _is_due(self, candidate: CandidateRecord, current_minutes: int) -> Optional[int]:
        """Minutes until start if the interview is inside the window, else None."""
        if candidate.interview_date is None:
            return None
        if not candidate.interview_time or not candidate.name:
            logger.debug(f"Skipping candidate {candidate.id}: missing time or name")
            return None

        interview_minutes = parse_time(candidate.interview_time)
        if interview_minutes is None:
            logger.debug(f"Skipping candidate {candidate.id}: unreadable time {candidate.interview_time!r}")
            return None

        delta = interview_minutes - current_minutes
        if 0 < delta <= self.window_minutes:
            return delta
        return None

    def _emit(self, alert: InterviewAlert) -> None:
        for surface in (self.toasts, self.notifier):
            if surface is None:
                continue
            try:
                surface.send(alert)
            except Exception as e:
                logger.error(f"Failed to deliver alert {alert.key} via {type(surface).__name__}: {e}")

    async def tick(self) -> List[InterviewAlert]:
        """
        Run one check and return the alerts raised by it.

        The return value is informational; alerts are delivered as a side
        effect through the configured surfaces.
        """
        self.stats["ticks"] += 1
        now = self.clock()
        current_minutes = now.hour * 60 + now.minute
        start, end = day_bounds(now)
        run = self._run

        try:
            candidates = await self.source.fetch_interviews_between(start, end)
        except Exception as e:
            self.stats["last_tick_error"] = str(e)
            logger.error(f"Error checking upcoming interviews: {e}")
            return []

        if self._stopped or run != self._run:
            logger.debug("Monitor stopped during fetch; discarding result")
            return []

        fired: List[InterviewAlert] = []
        try:
            for candidate in candidates:
                delta = self._is_due(candidate, current_minutes)
                if delta is None:
                    continue
                key = alert_key(candidate)
                if self.ledger.contains(key):
                    continue
                self.ledger.add(key)

                alert = InterviewAlert.for_candidate(candidate, round(delta))
                logger.info(f"Interview alert: {candidate.name} at {candidate.interview_time} (in {alert.minutes_until} min)")
                self._emit(alert)
                fired.append(alert)
                self.stats["alerts_sent"] += 1
        except Exception as e:
            self.stats["last_tick_error"] = str(e)
            logger.exception(f"Error processing upcoming interviews: {e}")
            return fired

        self.stats["last_tick_error"] = None
        self.stats["last_tick_found"] = len(candidates)
        logger.debug(
            f"Checked {len(candidates)} interviews today at {now:%H:%M}; "
            f"sent {len(fired)} alerts, tracking {len(self.ledger)}"
        )
        return fired

    def get_health(self) -> dict:
        health = self.scheduler.get_health()
        if self.stats["last_tick_error"] is not None:
            health["status"] = "unhealthy"
        health["monitor"] = {
            **self.stats,
            "tracked_alerts": len(self.ledger),
            "window_minutes": self.window_minutes,
            "notification_permission": self.notifier.permission if self.notifier else None,
        }
        return health
