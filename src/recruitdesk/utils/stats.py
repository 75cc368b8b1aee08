"""
Dashboard statistics over candidate records.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

from recruitdesk.models.candidate import CandidateRecord

__all__ = ["DashboardStats", "dashboard_stats", "parse_period"]

NOT_INTERESTED = "Not Interested"
FEEDBACK_AWAITED = "Feedback Awaited"
INTERVIEW_PENDING = frozenset({
    "Yet to Confirm",
    "Not Attended",
    "Reschedule",
    "Client Conf Pending",
})


@dataclass(frozen=True)
class DashboardStats:
    total_candidates: int = 0
    not_interested: int = 0
    interview_pending: int = 0
    feedback_awaited: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def parse_period(period: Optional[str]) -> Optional[int]:
    """
    Number of days in a period selector such as "30" or "30-entire".

    Returns None for an empty selector (all time).
    """
    if not period:
        return None
    days = int(period.replace("-entire", "").strip())
    if days < 0:
        raise ValueError(f"Period must not be negative: {period!r}")
    return days


def _as_comparable(value: datetime, reference: datetime) -> datetime:
    if (value.tzinfo is None) == (reference.tzinfo is None):
        return value
    if value.tzinfo is None:
        return value.astimezone()
    return value.astimezone(reference.tzinfo).replace(tzinfo=None)


def dashboard_stats(
    records: Iterable[CandidateRecord],
    days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> DashboardStats:
    """
    Count candidates into the four dashboard groups.

    With `days`, only records created in the last `days` days count;
    records without a creation time are left out. A candidate is counted
    once under "feedback awaited" even when both statuses say so.
    """
    cutoff = None
    if days is not None:
        now = now or datetime.now().astimezone()
        cutoff = now - timedelta(days=days)

    total = not_interested = pending = feedback = 0
    for r in records:
        if cutoff is not None:
            if r.created_at is None or _as_comparable(r.created_at, cutoff) < cutoff:
                continue
        total += 1
        if r.status1 == NOT_INTERESTED:
            not_interested += 1
        if r.status1 in INTERVIEW_PENDING:
            pending += 1
        if FEEDBACK_AWAITED in (r.status1, r.status2):
            feedback += 1

    return DashboardStats(
        total_candidates=total,
        not_interested=not_interested,
        interview_pending=pending,
        feedback_awaited=feedback,
    )
