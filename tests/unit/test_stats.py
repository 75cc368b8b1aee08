"""
Unit tests for dashboard statistics.
"""

from datetime import datetime, timezone

import pytest
from recruitdesk.models.candidate import CandidateRecord
from recruitdesk.utils.stats import DashboardStats, dashboard_stats, parse_period

NOW = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)


def _record(id, status1="", status2="", created_at=None):
    return CandidateRecord(id=id, status1=status1, status2=status2, created_at=created_at)


class TestDashboardStats:
    """Test cases for dashboard_stats."""

    def test_groups(self):
        records = [
            _record("1", status1="Not Interested"),
            _record("2", status1="Yet to Confirm"),
            _record("3", status1="Not Attended"),
            _record("4", status1="Reschedule"),
            _record("5", status1="Client Conf Pending"),
            _record("6", status1="Feedback Awaited"),
            _record("7", status1="Confirmed", status2="Feedback Awaited"),
            _record("8", status1="Confirmed"),
        ]
        assert dashboard_stats(records) == DashboardStats(
            total_candidates=8,
            not_interested=1,
            interview_pending=4,
            feedback_awaited=2,
        )

    def test_feedback_awaited_counted_once(self):
        records = [_record("1", status1="Feedback Awaited", status2="Feedback Awaited")]
        assert dashboard_stats(records).feedback_awaited == 1

    def test_empty(self):
        assert dashboard_stats([]).to_dict() == {
            "total_candidates": 0,
            "not_interested": 0,
            "interview_pending": 0,
            "feedback_awaited": 0,
        }

    def test_period_filters_on_created_at(self):
        records = [
            _record("1", status1="Not Interested", created_at=datetime(2024, 3, 25, tzinfo=timezone.utc)),
            _record("2", status1="Not Interested", created_at=datetime(2024, 2, 1, tzinfo=timezone.utc)),
            _record("3", status1="Reschedule"),
        ]
        stats = dashboard_stats(records, days=30, now=NOW)
        assert stats.total_candidates == 1
        assert stats.not_interested == 1
        assert stats.interview_pending == 0

    def test_naive_created_at_is_compared(self):
        records = [_record("1", created_at=datetime(2024, 3, 30))]
        assert dashboard_stats(records, days=7, now=NOW).total_candidates == 1

    def test_sample_candidates(self, sample_candidates):
        stats = dashboard_stats(sample_candidates)
        assert stats.total_candidates == 3
        assert stats.interview_pending == 1


class TestParsePeriod:
    @pytest.mark.parametrize("period,expected", [
        (None, None),
        ("", None),
        ("30", 30),
        ("90-entire", 90),
    ])
    def test_values(self, period, expected):
        assert parse_period(period) == expected

    @pytest.mark.parametrize("period", ["abc", "-5"])
    def test_invalid(self, period):
        with pytest.raises(ValueError):
            parse_period(period)
