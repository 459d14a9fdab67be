"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from calorie_tracker.domain.nutrition import NutrientTotals


@dataclass(frozen=True)
class DailyTotals:
    """Consumed totals for one day against current goals."""

    day: date
    consumed: NutrientTotals
    goals: NutrientTotals
    entry_count: int


@dataclass(frozen=True)
class PeriodSummary:
    """Daily totals and averages over a period."""

    daily: list[DailyTotals]
    average: NutrientTotals
