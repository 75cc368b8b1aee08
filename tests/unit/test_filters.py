"""
Unit tests for the candidate filter engine.
"""

from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest
from recruitdesk.utils.filters import (
    CandidateFilters,
    FilterState,
    filter_candidates,
    unique_managers,
)


class TestFilterCandidates:
    """Test cases for filter_candidates."""

    def test_no_active_filter_returns_input(self, sample_candidates):
        assert filter_candidates(sample_candidates, FilterState()) is sample_candidates

    def test_sentinels_are_inactive(self, sample_candidates):
        state = FilterState(
            mode="choose_mode",
            status1="choose_status1",
            status2="choose_status2",
            round="all_rounds",
            client_name="all_clients",
            position="all_positions",
            manager="all_managers",
        )
        assert state.active_filters() == []
        assert filter_candidates(sample_candidates, state) is sample_candidates

    def test_single_filter(self, sample_candidates):
        result = filter_candidates(sample_candidates, FilterState(mode="Virtual"))
        assert [c.id for c in result] == ["1", "3"]

    def test_filters_are_conjunctive(self, sample_candidates):
        state = FilterState(client_name="Acme Corp", round="L2")
        assert [c.id for c in filter_candidates(sample_candidates, state)] == ["3"]

    def test_match_is_case_sensitive(self, sample_candidates):
        assert filter_candidates(sample_candidates, FilterState(mode="virtual")) == []

    def test_manager_filter(self, sample_candidates):
        result = filter_candidates(sample_candidates, FilterState(manager="Arjun"))
        assert [c.id for c in result] == ["2"]

    def test_order_is_preserved(self, sample_candidates):
        reversed_input = list(reversed(sample_candidates))
        result = filter_candidates(reversed_input, FilterState(position="Backend Engineer"))
        assert [c.id for c in result] == ["3", "1"]

    def test_date_filter_ignores_time_of_day(self, sample_candidates):
        result = filter_candidates(sample_candidates, FilterState(interview_date=date(2024, 3, 4)))
        assert [c.id for c in result] == ["1"]

    def test_date_filter_accepts_datetime_and_string(self, sample_candidates):
        by_datetime = filter_candidates(
            sample_candidates, FilterState(interview_date=datetime(2024, 3, 5, 23, 59))
        )
        by_string = filter_candidates(sample_candidates, FilterState(interview_date="2024-03-05"))
        assert [c.id for c in by_datetime] == ["2"]
        assert [c.id for c in by_string] == ["2"]

    def test_date_filter_excludes_missing_dates(self, sample_candidates):
        result = filter_candidates(sample_candidates, FilterState(interview_date=date(2024, 3, 4)))
        assert all(c.interview_date is not None for c in result)

    def test_malformed_filter_date_matches_nothing(self, sample_candidates):
        assert filter_candidates(sample_candidates, FilterState(interview_date="not-a-date")) == []

    def test_aware_dates_compared_in_local_time(self, sample_candidates):
        local = datetime(2024, 3, 4, 12, 0).astimezone()
        aware = replace(sample_candidates[0], interview_date=local.astimezone(timezone(timedelta(hours=-11))))
        result = filter_candidates([aware], FilterState(interview_date=date(2024, 3, 4)))
        assert result == [aware]

    def test_filtered_result_is_subset(self, sample_candidates):
        result = filter_candidates(sample_candidates, FilterState(status1="Confirmed"))
        assert all(c in sample_candidates for c in result)
        assert all(c.status1 == "Confirmed" for c in result)


class TestUniqueManagers:
    def test_sorted_distinct_non_blank(self, sample_candidates):
        doubled = sample_candidates + [replace(sample_candidates[0], id="9")]
        assert unique_managers(doubled) == ["Arjun", "Priya"]


class TestCandidateFilters:
    """Test cases for the filter panel state."""

    def test_change_and_apply(self, sample_candidates):
        filters = CandidateFilters()
        filters.change("status1", "Confirmed")
        assert filters.active_count == 1
        assert [c.id for c in filters.apply(sample_candidates)] == ["1", "3"]

    def test_apply_recomputes_after_change(self, sample_candidates):
        filters = CandidateFilters()
        filters.change("round", "L2")
        assert len(filters.apply(sample_candidates)) == 2
        filters.change("round", "L1")
        assert [c.id for c in filters.apply(sample_candidates)] == ["1"]

    def test_sentinel_does_not_count_as_active(self):
        filters = CandidateFilters()
        filters.change("mode", "choose_mode")
        filters.change_date(date(2024, 3, 4))
        assert filters.active_count == 1

    def test_clear(self, sample_candidates):
        filters = CandidateFilters()
        filters.change("client_name", "Globex")
        filters.change_date(date(2024, 3, 5))
        filters.clear()
        assert filters.active_count == 0
        assert filters.apply(sample_candidates) is sample_candidates

    def test_unknown_filter(self):
        with pytest.raises(ValueError, match="Unknown filter"):
            CandidateFilters().change("salary", "100")

    def test_toggle_panel(self):
        filters = CandidateFilters()
        assert filters.toggle_panel() is True
        assert filters.toggle_panel() is False
