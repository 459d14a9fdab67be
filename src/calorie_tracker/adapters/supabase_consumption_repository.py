"""Supabase repository for consumption log entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    nutrient_columns,
    optional_uuid,
    parse_date,
    parse_nutrients,
    parse_timestamp,
)
from calorie_tracker.domain.consumption import LogEntry
from calorie_tracker.domain.nutrition import NutrientTotals
from calorie_tracker.services.consumption import ConsumptionRepository


@dataclass
class SupabaseConsumptionRepository(ConsumptionRepository):
    """Supabase implementation for consumption log entries."""

    client: Client

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        meal_id: UUID | None,
        name: str,
        nutrients: NutrientTotals,
        quantity: float,
        consumed_on: date,
        notes: str | None,
    ) -> LogEntry:
        """Create a consumption row and return it."""
        response = (
            self.client.table("user_consumption")
            .insert(
                {
                    "user_id": str(user_id),
                    "meal_id": str(meal_id) if meal_id else None,
                    "meal_name": name,
                    "quantity": quantity,
                    "consumed_date": consumed_on.isoformat(),
                    "notes": notes,
                    **nutrient_columns(nutrients),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create consumption entry")
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[LogEntry]:
        """Return entries consumed between start and end, inclusive."""
        response = (
            self.client.table("user_consumption")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("consumed_date", start.isoformat())
            .lte("consumed_date", end.isoformat())
            .order("consumed_date", desc=True)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_consumption_dates(self, user_id: UUID, since: date) -> set[date]:
        """Return distinct consumption dates on or after since."""
        response = (
            self.client.table("user_consumption")
            .select("consumed_date")
            .eq("user_id", str(user_id))
            .gte("consumed_date", since.isoformat())
            .execute()
        )
        return {parse_date(row["consumed_date"]) for row in response.data or []}

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> LogEntry | None:
        """Delete a user's consumption row and return it."""
        response = (
            self.client.table("user_consumption")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])


def _parse_entry(row: dict[str, object]) -> LogEntry:
    return LogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_id=optional_uuid(row.get("meal_id")),
        name=str(row.get("meal_name", "")),
        nutrients=parse_nutrients(row),
        quantity=float(row.get("quantity") or 1.0),
        consumed_on=parse_date(row["consumed_date"]),
        notes=row.get("notes"),
        created_at=parse_timestamp(row.get("created_at")),
    )
