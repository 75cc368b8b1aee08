"""
Free-text search box for the candidates table.
"""

from __future__ import annotations
from typing import Optional, Sequence

from recruitdesk.models.candidate import CandidateRecord

__all__ = ["SEARCH_FIELDS", "search_candidates"]

#: Attributes checked, in order; the first match wins.
SEARCH_FIELDS = (
    "name",
    "email",
    "position",
    "contact_number",
    "client_name",
    "recruiter_name",
    "interview_mode",
    "interview_round",
    "status1",
)


def search_candidates(
    candidates: Sequence[CandidateRecord],
    query: Optional[str],
) -> Sequence[CandidateRecord]:
    """
    Keep candidates where any searchable attribute starts with `query`.

    Matching is a case-insensitive prefix match ("ali" finds "Alice",
    "lice" does not). A blank query returns the input unchanged.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return candidates

    return [
        c for c in candidates
        if any((getattr(c, attr) or "").lower().startswith(needle) for attr in SEARCH_FIELDS)
    ]
