"""
Unit tests for CandidateRecord row mapping.
"""

from datetime import date, datetime, timezone

import pytest
from recruitdesk.models.candidate import CandidateRecord, parse_timestamp


class TestParseTimestamp:
    """Test cases for parse_timestamp."""

    def test_zulu_suffix(self):
        assert parse_timestamp("2024-03-01T09:15:00Z") == datetime(2024, 3, 1, 9, 15, tzinfo=timezone.utc)

    def test_date_becomes_midnight(self):
        assert parse_timestamp(date(2024, 3, 4)) == datetime(2024, 3, 4)

    @pytest.mark.parametrize("value", [None, "", "not a date", 12345])
    def test_unreadable(self, value):
        assert parse_timestamp(value) is None


class TestCandidateRecord:
    """Test cases for CandidateRecord.from_row."""

    def test_from_row(self, sample_row):
        c = CandidateRecord.from_row(sample_row)

        assert c.id == "c-101"
        assert c.manager == "Priya"
        assert c.client_id == "7"
        assert c.remarks == ""
        assert c.interview_date == datetime(2024, 3, 4, tzinfo=timezone.utc)
        assert c.interview_time == "14:30"

    def test_lowercase_manager_column(self, sample_row):
        del sample_row["Manager"]
        sample_row["manager"] = "Kiran"
        assert CandidateRecord.from_row(sample_row).manager == "Kiran"

    def test_missing_columns_default_to_empty(self):
        c = CandidateRecord.from_row({"id": 5})
        assert c.id == "5"
        assert c.name == ""
        assert c.interview_date is None
        assert c.client_id is None

    def test_bad_interview_date_is_none(self, sample_row):
        sample_row["interview_date"] = "31/12/2024"
        assert CandidateRecord.from_row(sample_row).interview_date is None

    def test_to_dict_uses_iso_strings(self, sample_row):
        data = CandidateRecord.from_row(sample_row).to_dict()
        assert data["interview_date"] == "2024-03-04T00:00:00+00:00"
        assert data["name"] == "Alice Johnson"

    def test_is_immutable(self, sample_row):
        c = CandidateRecord.from_row(sample_row)
        with pytest.raises(AttributeError):
            c.name = "Other"

    def test_created_at(self, sample_row):
        c = CandidateRecord.from_row(sample_row)
        assert c.created_at == datetime(2024, 2, 28, 11, 0, tzinfo=timezone.utc)
