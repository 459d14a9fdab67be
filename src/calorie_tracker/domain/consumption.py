"""Domain models for consumption logging."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from calorie_tracker.domain.catalog import CompositionEntry
from calorie_tracker.domain.nutrition import NutrientTotals

QUICK_MEAL_NAME = "Quick Meal"
MANUAL_ENTRY_NAME = "Manual Entry"


@dataclass(frozen=True)
class LogEntry:
    """A logged consumption with its captured nutrition snapshot."""

    id: UUID
    user_id: UUID
    meal_id: UUID | None
    name: str
    nutrients: NutrientTotals
    quantity: float
    consumed_on: date
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class MealSource:
    """Log a saved meal scaled by a serving multiplier.

    When components are given they replace the meal's foods for this log
    only, and the entry still points at the saved meal.
    """

    meal_id: UUID
    quantity: float = 1.0
    components: list[CompositionEntry] | None = None


@dataclass(frozen=True)
class AdHocSource:
    """Log a one-off combination of foods, optionally saving it as a meal."""

    components: list[CompositionEntry]
    name: str | None = None
    description: str | None = None
    save_as_meal: bool = False


@dataclass(frozen=True)
class ManualSource:
    """Log nutrient values entered directly."""

    values: Mapping[str, object] = field(default_factory=dict)
    name: str | None = None


ConsumptionSource = MealSource | AdHocSource | ManualSource
