"""Statistics service for logged consumption."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from calorie_tracker.domain.consumption import LogEntry
from calorie_tracker.domain.nutrition import NutrientTotals
from calorie_tracker.domain.stats import DailyTotals, PeriodSummary
from calorie_tracker.services.consumption import ConsumptionRepository
from calorie_tracker.services.goals import GoalsService
from calorie_tracker.services.history import sum_entries


@dataclass
class StatsService:
    """Service for live daily and weekly totals against current goals."""

    repository: ConsumptionRepository
    goals_service: GoalsService
    timezone_name: str = "UTC"

    def get_day(self, user_id: UUID, day: date) -> DailyTotals:
        """Return one day's totals."""
        logs = self.repository.list_entries(user_id, day, day)
        goals = self.goals_service.get_goals(user_id).values
        return _aggregate_day(day, logs, goals)

    def get_today(self, user_id: UUID) -> DailyTotals:
        """Return today's totals in the configured timezone."""
        return self.get_day(user_id, self._today())

    def get_week(self, user_id: UUID) -> PeriodSummary:
        """Return week-to-date totals and daily averages."""
        today = self._today()
        start = today - timedelta(days=today.weekday())
        end = start + timedelta(days=6)
        logs = self.repository.list_entries(user_id, start, end)
        goals = self.goals_service.get_goals(user_id).values
        return _aggregate_period(start, 7, logs, goals)

    def _today(self) -> date:
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()


def _aggregate_day(
    day: date, logs: list[LogEntry], goals: NutrientTotals
) -> DailyTotals:
    return DailyTotals(
        day=day,
        consumed=sum_entries(logs, day),
        goals=goals,
        entry_count=sum(1 for log in logs if log.consumed_on == day),
    )


def _aggregate_period(
    start: date, days: int, logs: list[LogEntry], goals: NutrientTotals
) -> PeriodSummary:
    daily = [
        _aggregate_day(start + timedelta(days=offset), logs, goals)
        for offset in range(days)
    ]
    totals = NutrientTotals.zero()
    for entry in daily:
        totals = totals.plus(entry.consumed)
    return PeriodSummary(daily=daily, average=totals.scaled(1 / max(len(daily), 1)))
