"""Tests for the pre-harvest interval (pause) calculator."""

from datetime import date, datetime

import pytest

from zmeurel.middleware.exceptions import BusinessLogicError
from zmeurel.services.pause_status import (
    PauseState,
    compute_pause_status,
    filter_by_pause_state,
)


@pytest.mark.unit
class TestComputePauseStatus:

    def test_waiting_before_earliest_date(self):
        result = compute_pause_status(date(2026, 6, 1), 10, today=date(2026, 6, 5))
        assert result.earliest_harvest_date == date(2026, 6, 11)
        assert result.status == PauseState.WAITING

    def test_ok_on_earliest_date(self):
        result = compute_pause_status(date(2026, 6, 1), 10, today=date(2026, 6, 11))
        assert result.status == PauseState.OK

    def test_waiting_the_day_before(self):
        result = compute_pause_status(date(2026, 6, 1), 10, today=date(2026, 6, 10))
        assert result.status == PauseState.WAITING

    def test_zero_days_is_ok_same_day(self):
        result = compute_pause_status(date(2026, 6, 1), 0, today=date(2026, 6, 1))
        assert result.earliest_harvest_date == date(2026, 6, 1)
        assert result.status == PauseState.OK

    def test_crosses_month_and_year(self):
        result = compute_pause_status(date(2026, 12, 25), 14, today=date(2027, 1, 1))
        assert result.earliest_harvest_date == date(2027, 1, 8)
        assert result.status == PauseState.WAITING

    def test_leap_day(self):
        result = compute_pause_status(date(2028, 2, 20), 10, today=date(2028, 3, 1))
        assert result.earliest_harvest_date == date(2028, 3, 1)
        assert result.status == PauseState.OK

    def test_datetime_is_truncated_to_date(self):
        result = compute_pause_status(datetime(2026, 6, 1, 23, 59), 1, today=date(2026, 6, 2))
        assert result.earliest_harvest_date == date(2026, 6, 2)
        assert result.status == PauseState.OK

    def test_missing_waiting_period_counts_as_zero(self):
        result = compute_pause_status(date(2026, 6, 1), None, today=date(2026, 6, 1))
        assert result.status == PauseState.OK

    def test_negative_waiting_period_rejected(self):
        with pytest.raises(BusinessLogicError) as exc_info:
            compute_pause_status(date(2026, 6, 1), -1, today=date(2026, 6, 1))
        assert exc_info.value.error_code == "INVALID_WAITING_PERIOD"

    def test_defaults_to_system_date(self):
        result = compute_pause_status(date.today(), 0)
        assert result.status == PauseState.OK


@pytest.mark.unit
class TestFilterByPauseState:

    def test_splits_activities(self):
        activities = [
            {"display_id": "AA001", "application_date": date(2026, 6, 1), "waiting_period_days": 3},
            {"display_id": "AA002", "application_date": date(2026, 6, 8), "waiting_period_days": 7},
            {"display_id": "AA003", "application_date": date(2026, 6, 9), "waiting_period_days": None},
        ]
        today = date(2026, 6, 10)

        ok = filter_by_pause_state(activities, PauseState.OK, today)
        waiting = filter_by_pause_state(activities, PauseState.WAITING, today)

        assert [a["display_id"] for a in ok] == ["AA001", "AA003"]
        assert [a["display_id"] for a in waiting] == ["AA002"]
