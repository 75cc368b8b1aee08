"""
Export candidate lists to a Google Sheets worksheet.
"""

from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

import gspread.exceptions

from recruitdesk.logging import logger
from recruitdesk.models.candidate import CandidateRecord
from recruitdesk.utils.validation import validate_spreadsheet_id

DEFAULT_TIMEZONE = "Asia/Kolkata"

#: (header, attribute) in column order.
EXPORT_COLUMNS = [
    ("Name", "name"),
    ("Email", "email"),
    ("Contact Number", "contact_number"),
    ("Client", "client_name"),
    ("Position", "position"),
    ("Recruiter", "recruiter_name"),
    ("Manager", "manager"),
    ("Interview Date", "interview_date"),
    ("Interview Time", "interview_time"),
    ("Round", "interview_round"),
    ("Mode", "interview_mode"),
    ("Status 1", "status1"),
    ("Status 2", "status2"),
    ("Date Informed", "date_informed"),
    ("Remarks", "remarks"),
]
_DATE_ATTRS = {"interview_date", "date_informed"}


def _format_date(value: Optional[datetime], tz: ZoneInfo) -> str:
    if value is None:
        return ""
    if value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.strftime("%b %d, %Y")


def candidate_rows(candidates: Sequence[CandidateRecord], timezone: str = DEFAULT_TIMEZONE) -> List[List[str]]:
    """Header row followed by one row per candidate; dates shown in `timezone`."""
    tz = ZoneInfo(timezone)
    rows = [[header for header, _ in EXPORT_COLUMNS]]
    for c in candidates:
        rows.append([
            _format_date(getattr(c, attr), tz) if attr in _DATE_ATTRS else getattr(c, attr)
            for _, attr in EXPORT_COLUMNS
        ])
    return rows


class SheetsExporter:
    """
    Writes candidate snapshots into a worksheet.
    Accepts an already authorized gspread client in ctor.
    """

    def __init__(self, gspread_client) -> None:
        self.gs = gspread_client

    def _worksheet(self, spreadsheet_id: str, title: str, rows: int, cols: int):
        sh = self.gs.open_by_key(spreadsheet_id)
        try:
            return sh.worksheet(title)
        except gspread.exceptions.WorksheetNotFound:
            logger.info(f"Creating worksheet '{title}'")
            return sh.add_worksheet(title=title, rows=rows, cols=cols)

    def export(
        self,
        spreadsheet_id: str,
        worksheet: str,
        candidates: Sequence[CandidateRecord],
        timezone: str = DEFAULT_TIMEZONE,
    ) -> int:
        """
        Replace the worksheet contents with `candidates`.

        Returns:
            Number of candidate rows written (0 when there was nothing to export)

        Raises:
            ValueError: If spreadsheet_id does not look like a Sheet ID
            gspread.exceptions.APIError: If a Sheets API call fails
        """
        if not validate_spreadsheet_id(spreadsheet_id):
            raise ValueError(f"Invalid spreadsheet id: {spreadsheet_id!r}")
        if not candidates:
            logger.warning("No candidates to export")
            return 0

        values = candidate_rows(candidates, timezone)
        try:
            ws = self._worksheet(spreadsheet_id, worksheet, rows=len(values) + 10, cols=len(EXPORT_COLUMNS))
            ws.clear()
            ws.update(range_name="A1", values=values)
        except gspread.exceptions.APIError as e:
            logger.error(f"Google Sheets API error during export: {e}")
            raise

        logger.info(f"Exported {len(candidates)} candidates to '{worksheet}'")
        return len(candidates)
