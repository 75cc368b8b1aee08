"""
Alert value type and the two surfaces an interview alert is shown on:

- ToastBoard: in-app toasts with a fixed visible duration
- SystemNotifier: opt-in OS-level notifications, gated by a permission
  prompt and de-duplicated by tag
"""

from __future__ import annotations
import itertools
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Protocol, Set

from recruitdesk.logging import logger
from recruitdesk.models.candidate import CandidateRecord

ALERT_TITLE = "UPCOMING INTERVIEW ALERT!"
DEFAULT_TOAST_SECONDS = 10

PERMISSION_DEFAULT = "default"
PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"


def alert_key(candidate: CandidateRecord) -> str:
    """Dedup key: candidate id plus the raw time text, so a rescheduled slot alerts again."""
    return f"{candidate.id}-{candidate.interview_time}"


@dataclass(frozen=True)
class InterviewAlert:
    key: str
    candidate_id: str
    name: str
    client_name: str
    position: str
    recruiter_name: str
    interview_time: str
    minutes_until: int

    @classmethod
    def for_candidate(cls, candidate: CandidateRecord, minutes_until: int) -> "InterviewAlert":
        return cls(
            key=alert_key(candidate),
            candidate_id=candidate.id,
            name=candidate.name,
            client_name=candidate.client_name,
            position=candidate.position,
            recruiter_name=candidate.recruiter_name,
            interview_time=candidate.interview_time,
            minutes_until=minutes_until,
        )

    @property
    def title(self) -> str:
        return ALERT_TITLE

    @property
    def body(self) -> str:
        return "\n".join([
            self.name,
            f"Client: {self.client_name or 'N/A'}",
            f"Position: {self.position or 'N/A'}",
            f"Recruiter: {self.recruiter_name or 'N/A'}",
            f"Time: {self.interview_time}",
            f"Starting in {self.minutes_until} minutes",
        ])


class AlertSink(Protocol):
    def send(self, alert: InterviewAlert) -> None: ...


# ---------------------------------------------------------------------
# In-app toasts
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class Toast:
    id: int
    title: str
    description: str
    variant: str
    created_at: datetime
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "variant": self.variant,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }


class ToastBoard:
    """
    Transient banners for the dashboard.

    Each toast stays visible for `duration_seconds`. Expired toasts are
    dropped on every `push()` and `active()`.
    """

    def __init__(
        self,
        duration_seconds: float = DEFAULT_TOAST_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.duration_seconds = duration_seconds
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._ids = itertools.count(1)
        self._toasts: List[Toast] = []

    def push(self, title: str, description: str, variant: str = "default") -> Toast:
        now = self._clock()
        toast = Toast(
            id=next(self._ids),
            title=title,
            description=description,
            variant=variant,
            created_at=now,
            expires_at=now + timedelta(seconds=self.duration_seconds),
        )
        self._prune(now)
        self._toasts.append(toast)
        return toast

    def send(self, alert: InterviewAlert) -> None:
        self.push(alert.title, alert.body)
        logger.info(f"Toast: {alert.name} at {alert.interview_time} (in {alert.minutes_until} min)")

    def _prune(self, now: datetime) -> None:
        self._toasts = [t for t in self._toasts if t.expires_at > now]

    def active(self) -> List[Toast]:
        self._prune(self._clock())
        return list(self._toasts)


# ---------------------------------------------------------------------
# System notifications
# ---------------------------------------------------------------------
class NotificationBackend(Protocol):
    def request_permission(self) -> str: ...
    def show(self, title: str, body: str, tag: str) -> None: ...


class LogNotificationBackend:
    """Writes notifications to the log; grants permission when enabled."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def request_permission(self) -> str:
        return PERMISSION_GRANTED if self.enabled else PERMISSION_DENIED

    def show(self, title: str, body: str, tag: str) -> None:
        logger.warning(f"{title} [{tag}] " + " | ".join(body.splitlines()))


class SystemNotifier:
    """
    OS-level notification surface.

    Permission starts undecided and is asked for at most once. A tag that
    was already shown is not shown again.
    """

    def __init__(self, backend: NotificationBackend, permission: str = PERMISSION_DEFAULT) -> None:
        self.backend = backend
        self.permission = permission
        self._shown: Set[str] = set()

    def request_permission(self) -> str:
        if self.permission != PERMISSION_DEFAULT:
            return self.permission
        try:
            self.permission = self.backend.request_permission()
        except Exception as e:
            logger.error(f"Notification permission request failed: {e}")
            self.permission = PERMISSION_DENIED
        logger.info(f"Notification permission: {self.permission}")
        return self.permission

    def send(self, alert: InterviewAlert) -> None:
        if self.permission != PERMISSION_GRANTED:
            return
        if alert.key in self._shown:
            logger.debug(f"Notification tag already shown: {alert.key}")
            return
        self._shown.add(alert.key)
        self.backend.show(alert.title, alert.body, tag=alert.key)
