"""Daily goals service."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.goals import DEFAULT_GOAL_VALUES, DailyGoals
from calorie_tracker.domain.nutrition import NutrientTotals, parse_nutrients


class GoalsRepository(Protocol):
    """Persistence interface for daily goals."""

    def get_goals(self, user_id: UUID) -> DailyGoals | None:
        """Return the user's goals if set."""

    def upsert_goals(
        self, user_id: UUID, values: NutrientTotals, updated_at: datetime
    ) -> DailyGoals:
        """Insert or replace the user's goals."""


@dataclass
class GoalsService:
    """Service for reading and updating daily goals."""

    repository: GoalsRepository

    def get_goals(self, user_id: UUID) -> DailyGoals:
        """Return the user's goals, or the defaults when unset."""
        goals = self.repository.get_goals(user_id)
        if goals is None:
            return DailyGoals(
                user_id=user_id, values=DEFAULT_GOAL_VALUES, is_default=True
            )
        return goals

    def set_goals(self, user_id: UUID, values: Mapping[str, object]) -> DailyGoals:
        """Validate and store the user's goals."""
        parsed = parse_nutrients(values, require_positive=True)
        return self.repository.upsert_goals(
            user_id, parsed, updated_at=datetime.now(tz=UTC)
        )
