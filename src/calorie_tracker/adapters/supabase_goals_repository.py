"""Supabase repository for daily goals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    nutrient_columns,
    parse_nutrients,
    parse_timestamp,
)
from calorie_tracker.domain.goals import DailyGoals
from calorie_tracker.domain.nutrition import NutrientTotals
from calorie_tracker.services.goals import GoalsRepository


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for daily goals."""

    client: Client

    def get_goals(self, user_id: UUID) -> DailyGoals | None:
        """Return the stored goals for a user."""
        response = (
            self.client.table("user_goals")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goals(response.data[0])

    def upsert_goals(
        self, user_id: UUID, values: NutrientTotals, updated_at: datetime
    ) -> DailyGoals:
        """Insert or replace the user's goals row."""
        response = (
            self.client.table("user_goals")
            .upsert(
                {
                    "user_id": str(user_id),
                    "updated_at": updated_at.isoformat(),
                    **nutrient_columns(values),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save goals")
        return _parse_goals(response.data[0])


def _parse_goals(row: dict[str, object]) -> DailyGoals:
    return DailyGoals(
        user_id=UUID(str(row["user_id"])),
        values=parse_nutrients(row),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
