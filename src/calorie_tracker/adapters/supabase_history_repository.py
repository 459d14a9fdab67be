"""Supabase repository for daily nutrition snapshots."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    nutrient_columns,
    parse_date,
    parse_nutrients,
    parse_timestamp,
)
from calorie_tracker.domain.history import DailyHistorySnapshot
from calorie_tracker.domain.nutrition import NutrientTotals
from calorie_tracker.services.history import HistoryRepository

_TABLE = "daily_nutrition_snapshots"


@dataclass
class SupabaseHistoryRepository(HistoryRepository):
    """Supabase implementation for daily nutrition snapshots."""

    client: Client

    def upsert_snapshot(
        self,
        user_id: UUID,
        log_date: date,
        goals: NutrientTotals,
        consumed: NutrientTotals,
    ) -> DailyHistorySnapshot:
        """Upsert through a database function so goals are only set on insert."""
        response = self.client.rpc(
            "upsert_daily_nutrition_snapshot",
            {
                "p_user_id": str(user_id),
                "p_log_date": log_date.isoformat(),
                **nutrient_columns(goals, prefix="p_", suffix="_goal"),
                **nutrient_columns(consumed, prefix="p_", suffix="_consumed"),
            },
        ).execute()
        rows = response.data
        if isinstance(rows, dict):
            rows = [rows]
        if not rows:
            existing = self.get_snapshot(user_id, log_date)
            if existing is None:
                raise RuntimeError("Failed to upsert daily snapshot")
            return existing
        return _parse_snapshot(rows[0])

    def get_snapshot(
        self, user_id: UUID, log_date: date
    ) -> DailyHistorySnapshot | None:
        """Return the snapshot for a user and date."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("log_date", log_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_snapshot(response.data[0])

    def list_snapshots(self, user_id: UUID) -> list[DailyHistorySnapshot]:
        """Return the user's snapshots, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("log_date", desc=True)
            .execute()
        )
        return [_parse_snapshot(row) for row in response.data or []]

    def update_consumed_totals(
        self,
        user_id: UUID,
        log_date: date,
        consumed: NutrientTotals,
        updated_at: datetime,
    ) -> DailyHistorySnapshot | None:
        """Overwrite consumed totals and mark the snapshot corrected."""
        response = (
            self.client.table(_TABLE)
            .update(
                {
                    **nutrient_columns(consumed, suffix="_consumed"),
                    "is_corrected": True,
                    "updated_at": updated_at.isoformat(),
                }
            )
            .eq("user_id", str(user_id))
            .eq("log_date", log_date.isoformat())
            .execute()
        )
        if not response.data:
            return None
        return _parse_snapshot(response.data[0])

    def clear_correction(self, user_id: UUID, log_date: date) -> None:
        """Unmark a corrected snapshot."""
        self.client.table(_TABLE).update({"is_corrected": False}).eq(
            "user_id", str(user_id)
        ).eq("log_date", log_date.isoformat()).eq("is_corrected", True).execute()

    def delete_snapshots_before(
        self, cutoff: date, user_id: UUID | None = None
    ) -> int:
        """Delete snapshots dated before cutoff."""
        query = self.client.table(_TABLE).delete().lt("log_date", cutoff.isoformat())
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.execute()
        return len(response.data or [])


def _parse_snapshot(row: dict[str, object]) -> DailyHistorySnapshot:
    consumed = parse_nutrients(row, suffix="_consumed")
    return DailyHistorySnapshot(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        log_date=parse_date(row["log_date"]),
        goals=parse_nutrients(row, suffix="_goal"),
        consumed=NutrientTotals(
            calories=consumed.calories,
            protein=consumed.protein,
            carbs=consumed.carbs,
            fat=consumed.fat,
            sugar=consumed.sugar or 0.0,
            fiber=consumed.fiber or 0.0,
        ),
        is_corrected=bool(row.get("is_corrected", False)),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )
