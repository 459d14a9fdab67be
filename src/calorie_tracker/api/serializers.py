"""JSON serialization of domain models for API responses."""

from calorie_tracker.domain.catalog import CompositionEntry, Food, Ingredient, Meal
from calorie_tracker.domain.consumption import LogEntry
from calorie_tracker.domain.goals import DailyGoals
from calorie_tracker.domain.history import (
    DailyHistorySnapshot,
    ReconcileReport,
    progress_against,
)
from calorie_tracker.domain.stats import DailyTotals, PeriodSummary


def serialize_ingredient(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": str(ingredient.id),
        "name": ingredient.name,
        "brand_name": ingredient.brand_name,
        "description": ingredient.description,
        "category": ingredient.category,
        "reference": {
            "amount": ingredient.reference.amount,
            "unit": ingredient.reference.unit,
        },
        "nutrients": ingredient.nutrients.as_dict(),
    }


def serialize_food(food: Food) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "brand_name": food.brand_name,
        "description": food.description,
        "category": food.category,
        "is_composite": food.is_composite,
        "reference": {"amount": food.reference.amount, "unit": food.reference.unit},
        "composition": [_serialize_entry(entry) for entry in food.composition],
        "nutrients": food.nutrients.as_dict(),
    }


def serialize_meal(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "name": meal.name,
        "description": meal.description,
        "composition": [_serialize_entry(entry) for entry in meal.composition],
        "nutrients": meal.nutrients.as_dict(),
    }


def serialize_log_entry(entry: LogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "meal_id": str(entry.meal_id) if entry.meal_id else None,
        "name": entry.name,
        "quantity": entry.quantity,
        "consumed_on": entry.consumed_on.isoformat(),
        "notes": entry.notes,
        "nutrients": entry.nutrients.as_dict(),
    }


def serialize_goals(goals: DailyGoals) -> dict[str, object]:
    return {
        "user_id": str(goals.user_id),
        "is_default": goals.is_default,
        "updated_at": goals.updated_at.isoformat() if goals.updated_at else None,
        **goals.values.as_dict(),
    }


def serialize_snapshot(
    snapshot: DailyHistorySnapshot, editable: bool
) -> dict[str, object]:
    return {
        "id": str(snapshot.id),
        "log_date": snapshot.log_date.isoformat(),
        "goals": snapshot.goals.as_dict(),
        "consumed": snapshot.consumed.as_dict(),
        "progress": snapshot.progress(),
        "is_corrected": snapshot.is_corrected,
        "editable": editable,
    }


def serialize_report(report: ReconcileReport) -> dict[str, object]:
    return {
        "reconciled": [day.isoformat() for day in report.reconciled],
        "failures": {day.isoformat(): error for day, error in report.failures.items()},
        "purged": report.purged,
    }


def serialize_daily_totals(totals: DailyTotals) -> dict[str, object]:
    return {
        "day": totals.day.isoformat(),
        "entry_count": totals.entry_count,
        "consumed": totals.consumed.as_dict(),
        "goals": totals.goals.as_dict(),
        "progress": progress_against(totals.consumed, totals.goals),
    }


def serialize_period(summary: PeriodSummary) -> dict[str, object]:
    return {
        "daily": [serialize_daily_totals(day) for day in summary.daily],
        "average": summary.average.as_dict(),
    }


def _serialize_entry(entry: CompositionEntry) -> dict[str, object]:
    return {
        "component_id": str(entry.component_id),
        "quantity": entry.quantity,
        "unit": entry.unit,
    }
