"""
"Today's interviews" summary for the dashboard.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Iterable, List

from recruitdesk.models.candidate import CandidateRecord
from recruitdesk.utils.timeparse import NO_TIME, to_24_hour

__all__ = ["TodayInterview", "summarize_todays_interviews"]


@dataclass(frozen=True)
class TodayInterview:
    candidate: str
    mobile: str
    client: str
    position: str
    recruiter: str
    manager: str
    time: str
    mode: str
    status1: str

    def to_dict(self) -> dict:
        return asdict(self)


def _or_na(value: str) -> str:
    return value or NO_TIME


def summarize_todays_interviews(records: Iterable[CandidateRecord]) -> List[TodayInterview]:
    """
    Build the dashboard rows for the given records, earliest slot first.

    Records without an interview date are dropped. Blank fields show as
    "N/A" (status defaults to "Pending") and "N/A" times sort last.
    """
    rows = [
        TodayInterview(
            candidate=_or_na(r.name),
            mobile=_or_na(r.contact_number),
            client=_or_na(r.client_name),
            position=_or_na(r.position),
            recruiter=_or_na(r.recruiter_name),
            manager=_or_na(r.manager),
            time=_or_na(r.interview_time),
            mode=_or_na(r.interview_mode),
            status1=r.status1 or "Pending",
        )
        for r in records
        if r.interview_date is not None
    ]
    return sorted(rows, key=lambda row: (row.time == NO_TIME, to_24_hour(row.time)))
