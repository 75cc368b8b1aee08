"""
Fake candidate data source for testing.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from recruitdesk.models.candidate import CandidateRecord


class FakeCandidateSource:
    """
    In-memory stand-in for SupabaseCandidateSource.

    Returns `candidates` whose interview_date lies in the requested range
    and records every call. Set `error` to make the next fetches fail.
    """

    def __init__(self, candidates: Optional[List[CandidateRecord]] = None):
        self.candidates = list(candidates or [])
        self.error: Optional[Exception] = None
        self.calls: List[Tuple[datetime, datetime]] = []
        self.on_fetch = None
        self.closed = False

    async def fetch_interviews_between(self, start: datetime, end: datetime) -> List[CandidateRecord]:
        self.calls.append((start, end))
        if self.on_fetch is not None:
            self.on_fetch()
        if self.error is not None:
            raise self.error
        return [
            c for c in self.candidates
            if c.interview_date is not None and start <= c.interview_date <= end
        ]

    async def fetch_candidates(self, search_term: str = "") -> List[CandidateRecord]:
        term = search_term.lower()
        return [c for c in self.candidates if term in c.name.lower()]

    async def get_candidate(self, candidate_id: str) -> Optional[CandidateRecord]:
        return next((c for c in self.candidates if c.id == candidate_id), None)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self.closed = True
