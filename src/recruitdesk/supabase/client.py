"""
Async client for the candidates table behind Supabase's PostgREST API.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple

import httpx

from recruitdesk.logging import logger
from recruitdesk.models.candidate import CandidateRecord
from recruitdesk.utils.validation import validate_candidate_row


class SupabaseQueryError(Exception):
    """Raised when PostgREST answers with a non-2xx status or unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SupabaseCandidateSource:
    """
    Read access to the `candidates` table.

    Accepts the project URL and API key; `access_token` (a user session
    JWT) replaces the key in the Authorization header when row-level
    security requires a signed-in user.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "candidates",
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.table = table
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SupabaseCandidateSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _select(self, params: Sequence[Tuple[str, str]]) -> List[dict]:
        try:
            resp = await self._client.get(f"/{self.table}", params=list(params))
        except httpx.HTTPError as e:
            logger.error(f"Supabase request to '{self.table}' failed: {e}")
            raise SupabaseQueryError(f"Request to '{self.table}' failed: {e}") from e

        if resp.status_code >= 400:
            detail = _error_detail(resp)
            logger.error(f"Supabase query on '{self.table}' failed ({resp.status_code}): {detail}")
            raise SupabaseQueryError(detail, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise SupabaseQueryError(f"Invalid JSON from '{self.table}': {e}", status_code=resp.status_code) from e
        if not isinstance(data, list):
            raise SupabaseQueryError(f"Unexpected payload from '{self.table}': {type(data).__name__}")
        return data

    @staticmethod
    def _to_records(rows: List[dict]) -> List[CandidateRecord]:
        return [CandidateRecord.from_row(row) for row in rows if validate_candidate_row(row)]

    async def fetch_interviews_between(self, start: datetime, end: datetime) -> List[CandidateRecord]:
        """Candidates whose interview_date lies in [start, end] (inclusive, non-null)."""
        rows = await self._select([
            ("select", "*"),
            ("interview_date", f"gte.{start.isoformat()}"),
            ("interview_date", f"lte.{end.isoformat()}"),
            ("interview_date", "not.is.null"),
        ])
        logger.debug(f"Found {len(rows)} interviews between {start.isoformat()} and {end.isoformat()}")
        return self._to_records(rows)

    async def fetch_candidates(self, search_term: str = "") -> List[CandidateRecord]:
        """All candidates, newest first; `search_term` narrows by name (substring, case-insensitive)."""
        params = [("select", "*"), ("order", "created_at.desc")]
        if search_term:
            params.append(("name", f"ilike.*{search_term}*"))
        rows = await self._select(params)
        logger.debug(f"Fetched {len(rows)} candidates")
        return self._to_records(rows)

    async def get_candidate(self, candidate_id: str) -> Optional[CandidateRecord]:
        rows = await self._select([("select", "*"), ("id", f"eq.{candidate_id}"), ("limit", "1")])
        records = self._to_records(rows)
        return records[0] if records else None


def _error_detail(resp: httpx.Response) -> str:
    try:
        body: Any = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
