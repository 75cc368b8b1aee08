"""
Mock gspread client for testing.
"""

from typing import Dict, List, Optional

import gspread.exceptions


class MockGspreadClient:
    """Mock gspread client holding worksheets of one spreadsheet."""

    def __init__(self, worksheets: Optional[List[str]] = None):
        self.spreadsheet = MockSpreadsheet(worksheets or [])
        self.opened: List[str] = []

    def open_by_key(self, spreadsheet_id: str):
        self.opened.append(spreadsheet_id)
        return self.spreadsheet


class MockSpreadsheet:
    def __init__(self, titles: List[str]):
        self.worksheets: Dict[str, MockWorksheet] = {t: MockWorksheet(t) for t in titles}

    def worksheet(self, title: str):
        if title not in self.worksheets:
            raise gspread.exceptions.WorksheetNotFound(title)
        return self.worksheets[title]

    def add_worksheet(self, title: str, rows: int, cols: int):
        ws = MockWorksheet(title, rows=rows, cols=cols)
        self.worksheets[title] = ws
        return ws


class MockWorksheet:
    def __init__(self, title: str, rows: int = 1000, cols: int = 26):
        self.title = title
        self.rows = rows
        self.cols = cols
        self.values: List[List[str]] = [["stale"]]
        self.cleared = False

    def clear(self):
        self.cleared = True
        self.values = []

    def update(self, range_name: str = "A1", values: Optional[List[List[str]]] = None, **kwargs):
        self.values = values or []
        return {"updatedRange": range_name}
