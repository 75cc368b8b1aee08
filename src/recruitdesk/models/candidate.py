"""
Candidate record as read from the `candidates` table.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Any, Mapping, Optional

__all__ = ["CandidateRecord", "parse_timestamp"]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp coming from PostgREST.

    Accepts datetime/date objects as-is (dates become midnight) and
    returns None for anything empty or unreadable.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class CandidateRecord:
    """
    One tracked applicant.

    Text attributes are never None (missing columns map to ""), so callers
    can compare and lowercase them freely. `interview_date` is None when no
    interview is scheduled.
    """

    id: str
    name: str = ""
    email: str = ""
    contact_number: str = ""
    position: str = ""
    client_name: str = ""
    recruiter_name: str = ""
    manager: str = ""
    interview_mode: str = ""
    interview_round: str = ""
    status1: str = ""
    status2: str = ""
    interview_date: Optional[datetime] = None
    interview_time: str = ""
    client_id: Optional[str] = None
    date_informed: Optional[datetime] = None
    remarks: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CandidateRecord":
        """
        Map a raw snake_case row to a record.

        The manager column is called "Manager" in the table; the lowercase
        spelling is accepted too.
        """
        manager = row.get("Manager")
        if manager is None:
            manager = row.get("manager")
        client_id = row.get("client_id")

        return cls(
            id=_text(row.get("id")),
            name=_text(row.get("name")),
            email=_text(row.get("email")),
            contact_number=_text(row.get("contact_number")),
            position=_text(row.get("position")),
            client_name=_text(row.get("client_name")),
            recruiter_name=_text(row.get("recruiter_name")),
            manager=_text(manager),
            interview_mode=_text(row.get("interview_mode")),
            interview_round=_text(row.get("interview_round")),
            status1=_text(row.get("status1")),
            status2=_text(row.get("status2")),
            interview_date=parse_timestamp(row.get("interview_date")),
            interview_time=_text(row.get("interview_time")),
            client_id=str(client_id) if client_id else None,
            date_informed=parse_timestamp(row.get("date_informed")),
            remarks=_text(row.get("remarks")),
            created_at=parse_timestamp(row.get("created_at")),
        )

    def to_dict(self) -> dict:
        """Plain dict (ISO strings for timestamps), e.g. for JSON output."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            out[f.name] = value.isoformat() if isinstance(value, datetime) else value
        return out
