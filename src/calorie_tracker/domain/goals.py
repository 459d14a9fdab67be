"""Domain models for daily goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import NutrientTotals

DEFAULT_GOAL_VALUES = NutrientTotals(
    calories=2000.0,
    protein=150.0,
    carbs=250.0,
    fat=65.0,
    sugar=None,
    fiber=None,
)


@dataclass(frozen=True)
class DailyGoals:
    """A user's current daily targets."""

    user_id: UUID
    values: NutrientTotals
    updated_at: datetime | None = None
    is_default: bool = False
