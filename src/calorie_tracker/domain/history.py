"""Domain models for daily history snapshots."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import NUTRIENT_FIELDS, NutrientTotals


@dataclass(frozen=True)
class DailyHistorySnapshot:
    """Consumed totals for one user and date, paired with frozen goals."""

    id: UUID
    user_id: UUID
    log_date: date
    goals: NutrientTotals
    consumed: NutrientTotals
    is_corrected: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def progress(self) -> dict[str, float | None]:
        """Return consumed/goal percentages, None where no goal is set."""
        return progress_against(self.consumed, self.goals)


@dataclass
class ReconcileReport:
    """Outcome of a history reconciliation pass."""

    reconciled: list[date] = field(default_factory=list)
    failures: dict[date, str] = field(default_factory=dict)
    purged: int = 0


def progress_against(
    consumed: NutrientTotals, goals: NutrientTotals
) -> dict[str, float | None]:
    """Return per-nutrient progress percentages."""
    progress: dict[str, float | None] = {}
    for name in NUTRIENT_FIELDS:
        goal = getattr(goals, name)
        if not goal:
            progress[name] = None
            continue
        progress[name] = (getattr(consumed, name) or 0.0) / goal * 100
    return progress
