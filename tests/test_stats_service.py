"""Tests for stats service."""

from datetime import UTC, date, datetime, timedelta

import pytest

from calorie_tracker.domain.consumption import ManualSource

VALUES = {"calories": 500, "protein": 30, "carbs": 50, "fat": 10, "fiber": 6}


def test_get_day_sums_entries_for_that_day(
    consumption_service, stats_service, user_id
) -> None:
    day = date(2024, 1, 15)
    consumption_service.log_consumption(user_id, ManualSource(values=VALUES), day)
    consumption_service.log_consumption(user_id, ManualSource(values=VALUES), day)
    consumption_service.log_consumption(
        user_id, ManualSource(values=VALUES), day + timedelta(days=1)
    )

    totals = stats_service.get_day(user_id, day)

    assert totals.entry_count == 2
    assert totals.consumed.calories == 1000
    assert totals.consumed.fiber == 12
    assert totals.goals.calories == 2000


def test_get_today_uses_current_goals(
    consumption_service, goals_service, stats_service, user_id
) -> None:
    today = datetime.now(tz=UTC).date()
    goals_service.set_goals(
        user_id, {"calories": 2500, "protein": 180, "carbs": 300, "fat": 80}
    )
    consumption_service.log_consumption(user_id, ManualSource(values=VALUES), today)

    totals = stats_service.get_today(user_id)

    assert totals.day == today
    assert totals.consumed.calories == 500
    assert totals.goals.calories == 2500


def test_get_week_averages_over_seven_days(
    consumption_service, stats_service, user_id
) -> None:
    today = datetime.now(tz=UTC).date()
    monday = today - timedelta(days=today.weekday())
    consumption_service.log_consumption(user_id, ManualSource(values=VALUES), monday)

    summary = stats_service.get_week(user_id)

    assert [day.day for day in summary.daily][0] == monday
    assert len(summary.daily) == 7
    assert summary.daily[0].consumed.calories == 500
    assert summary.average.calories == pytest.approx(500 / 7)
