"""Row conversion helpers shared by the Supabase repositories."""

from datetime import date, datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import NutrientTotals


def nutrient_columns(
    nutrients: NutrientTotals, prefix: str = "", suffix: str = ""
) -> dict[str, float | None]:
    """Return nutrient values keyed by column name."""
    return {
        f"{prefix}{name}{suffix}": value
        for name, value in nutrients.as_dict().items()
    }


def parse_nutrients(
    row: dict[str, object], prefix: str = "", suffix: str = ""
) -> NutrientTotals:
    """Read six nutrient columns from a row."""
    return NutrientTotals(
        calories=float(row.get(f"{prefix}calories{suffix}") or 0.0),
        protein=float(row.get(f"{prefix}protein{suffix}") or 0.0),
        carbs=float(row.get(f"{prefix}carbs{suffix}") or 0.0),
        fat=float(row.get(f"{prefix}fat{suffix}") or 0.0),
        sugar=optional_float(row.get(f"{prefix}sugar{suffix}")),
        fiber=optional_float(row.get(f"{prefix}fiber{suffix}")),
    )


def optional_float(value: object) -> float | None:
    """Return value as a float, or None when the column is null."""
    if value is None:
        return None
    return float(value)


def optional_uuid(value: object) -> UUID | None:
    """Return value as a UUID, or None when the column is null."""
    if not value:
        return None
    return UUID(str(value))


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO timestamp column."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def parse_date(value: object) -> date:
    """Parse an ISO date column."""
    return date.fromisoformat(str(value)[:10])
