"""
Unit tests for validation utilities.
"""

import pytest
from recruitdesk.utils.validation import (
    validate_candidate_row,
    validate_email_address,
    validate_spreadsheet_id,
)


class TestValidateEmailAddress:
    @pytest.mark.parametrize("email", ["alice@example.com", "  bob@x.io  "])
    def test_valid(self, email):
        assert validate_email_address(email) is True

    @pytest.mark.parametrize("email", ["", "   ", "alice.example.com", None, 42])
    def test_invalid(self, email):
        assert validate_email_address(email) is False


class TestValidateCandidateRow:
    def test_valid_row(self, sample_row):
        assert validate_candidate_row(sample_row) is True

    def test_numeric_id(self):
        assert validate_candidate_row({"id": 0}) is True

    @pytest.mark.parametrize("row", [{"name": "no id"}, {"id": ""}, {"id": "  "}, {"id": None}, ["id", 1]])
    def test_invalid_rows(self, row):
        assert validate_candidate_row(row) is False


class TestValidateSpreadsheetId:
    def test_valid(self):
        assert validate_spreadsheet_id("1AbCdEfGhIjKlMnOpQrStUvWxYz0123456789") is True

    @pytest.mark.parametrize("sheet_id", ["", "short", "x" * 101, None])
    def test_invalid(self, sheet_id):
        assert validate_spreadsheet_id(sheet_id) is False
