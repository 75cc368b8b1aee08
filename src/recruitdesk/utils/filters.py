"""
Candidate filtering for the candidates table.

A FilterState holds the choices made in the advanced filter panel.
`filter_candidates` applies every active choice (logical AND) and keeps
the input order. Each select has a placeholder value ("choose_mode",
"all_clients", ...) that means the same as leaving it empty.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from recruitdesk.models.candidate import CandidateRecord, parse_timestamp

__all__ = [
    "FILTER_FIELDS",
    "FilterState",
    "CandidateFilters",
    "filter_candidates",
    "unique_managers",
]

DateLike = Union[date, datetime, str]

# ---------------------------------------------------------------------
# filter name -> (candidate attribute, placeholder value)
# ---------------------------------------------------------------------
FILTER_FIELDS: Dict[str, Tuple[str, str]] = {
    "mode": ("interview_mode", "choose_mode"),
    "status1": ("status1", "choose_status1"),
    "status2": ("status2", "choose_status2"),
    "round": ("interview_round", "all_rounds"),
    "client_name": ("client_name", "all_clients"),
    "position": ("position", "all_positions"),
    "manager": ("manager", "all_managers"),
}


@dataclass
class FilterState:
    """Current filter panel selection. Empty strings / None mean "any"."""

    mode: str = ""
    status1: str = ""
    status2: str = ""
    round: str = ""
    client_name: str = ""
    position: str = ""
    interview_date: Optional[DateLike] = None
    manager: str = ""

    def is_active(self, name: str) -> bool:
        """True if filter `name` narrows the result."""
        if name == "interview_date":
            return self.interview_date is not None
        value = getattr(self, name)
        return bool(value) and value != FILTER_FIELDS[name][1]

    def active_filters(self) -> List[str]:
        return [f.name for f in fields(self) if self.is_active(f.name)]


def _calendar_day(value: object) -> Optional[date]:
    """
    Calendar day of a date/datetime/ISO string, or None if unreadable.

    Aware datetimes are converted to local time first.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            try:
                value = value.astimezone()
            except (OverflowError, OSError, ValueError):
                return None
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _matches(candidate: CandidateRecord, state: FilterState, active: Sequence[str], day: Optional[date]) -> bool:
    for name in active:
        if name == "interview_date":
            if candidate.interview_date is None:
                return False
            if day is None or _calendar_day(candidate.interview_date) != day:
                return False
            continue
        attr, _ = FILTER_FIELDS[name]
        if getattr(candidate, attr) != getattr(state, name):
            return False
    return True


def filter_candidates(
    candidates: Sequence[CandidateRecord],
    state: FilterState,
) -> Sequence[CandidateRecord]:
    """
    Return the candidates that satisfy every active filter, in input order.

    String filters compare exactly (case-sensitive). The date filter keeps
    candidates whose interview falls on the same calendar day, ignoring
    time of day; candidates without an interview date never match it.
    With no active filter the input is returned unchanged.
    """
    active = state.active_filters()
    if not active:
        return candidates

    day = _calendar_day(state.interview_date) if "interview_date" in active else None
    return [c for c in candidates if _matches(c, state, active, day)]


def unique_managers(candidates: Iterable[CandidateRecord]) -> List[str]:
    """Sorted distinct non-blank managers, for the manager select."""
    return sorted({c.manager for c in candidates if c.manager and c.manager.strip()})


class CandidateFilters:
    """
    Filter panel state.

    `apply` recomputes from scratch on every call; there is no cached
    result that could go stale when the list or the filters change.
    """

    def __init__(self) -> None:
        self.state = FilterState()
        self.panel_open = False

    def change(self, name: str, value: str) -> None:
        """Set one select filter (see FILTER_FIELDS for names)."""
        if name not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter: {name}")
        setattr(self.state, name, value)

    def change_date(self, value: Optional[DateLike]) -> None:
        self.state.interview_date = value

    def clear(self) -> None:
        """Reset every filter to its unset value."""
        self.state = FilterState()

    def toggle_panel(self) -> bool:
        self.panel_open = not self.panel_open
        return self.panel_open

    @property
    def active_count(self) -> int:
        return len(self.state.active_filters())

    def apply(self, candidates: Sequence[CandidateRecord]) -> Sequence[CandidateRecord]:
        return filter_candidates(candidates, self.state)
