"""
Unit tests for time-of-day parsing.
"""

import pytest
from recruitdesk.utils.timeparse import parse_time, to_24_hour, UNKNOWN_SLOT


class TestParseTime:
    """Test cases for parse_time."""

    @pytest.mark.parametrize("text,expected", [
        ("14:30", 870),
        ("09:05", 545),
        ("0:00", 0),
        ("3 PM", 900),
        ("11am", 660),
        ("12 PM", 720),
        ("12am", 0),
        ("2:15pm", 840),
        ("10:30 AM", 600),
        ("15", 900),
        (" 10:45 ", 645),
    ])
    def test_valid_times(self, text, expected):
        assert parse_time(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "N/A", None, "abc", "ab:cd", "10:xx", "pm"])
    def test_unreadable_times(self, text):
        assert parse_time(text) is None

    def test_meridiem_is_case_insensitive(self):
        assert parse_time("3 pm") == parse_time("3 PM") == parse_time("3 Pm")

    def test_range_is_not_validated(self):
        assert parse_time("25:00") == 1500


class TestTo24Hour:
    """Test cases for to_24_hour."""

    def test_colon_values_are_padded(self):
        assert to_24_hour("8:00") == "08:00"
        assert to_24_hour("14:30") == "14:30"

    def test_meridiem_values(self):
        assert to_24_hour("3 PM") == "15:00"
        assert to_24_hour("11 AM") == "11:00"
        assert to_24_hour("12 AM") == "00:00"

    @pytest.mark.parametrize("text", ["", "N/A", None, "soon"])
    def test_unknown(self, text):
        assert to_24_hour(text) == UNKNOWN_SLOT
