"""Consumption logging service."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.catalog import MealDraft
from calorie_tracker.domain.consumption import (
    MANUAL_ENTRY_NAME,
    QUICK_MEAL_NAME,
    AdHocSource,
    ConsumptionSource,
    LogEntry,
    ManualSource,
    MealSource,
)
from calorie_tracker.domain.errors import (
    NotFoundError,
    SourceNotFoundError,
    ValidationError,
)
from calorie_tracker.domain.nutrition import NutrientTotals, parse_nutrients
from calorie_tracker.services.catalog import CatalogService

_logger = logging.getLogger(__name__)


class ConsumptionRepository(Protocol):
    """Persistence interface for consumption log entries."""

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
        """Create a log entry and return it."""

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[LogEntry]:
        """Return entries consumed between start and end, inclusive."""

    def list_consumption_dates(self, user_id: UUID, since: date) -> set[date]:
        """Return the distinct dates with entries on or after since."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> LogEntry | None:
        """Delete a user's entry and return it, or None when nothing matched."""


class CorrectionTracker(Protocol):
    """Releases manual history corrections when a day's entries change."""

    def clear_correction(self, user_id: UUID, log_date: date) -> None:
        """Let the next reconciliation refresh the day's consumed totals."""


@dataclass
class ConsumptionService:
    """Captures immutable nutrition snapshots of what a user ate."""

    catalog_service: CatalogService
    repository: ConsumptionRepository
    corrections: CorrectionTracker | None = None

    def log_consumption(
        self,
        user_id: UUID,
        source: ConsumptionSource,
        consumed_on: date,
        notes: str | None = None,
    ) -> LogEntry:
        """Compute the snapshot for a source and persist a log entry."""
        if isinstance(source, MealSource):
            _check_quantity(source.quantity)
            meal_id, name, nutrients = self._resolve_meal(source)
            quantity = source.quantity
        elif isinstance(source, AdHocSource):
            meal_id, name, nutrients = self._resolve_ad_hoc(user_id, source)
            quantity = 1.0
        elif isinstance(source, ManualSource):
            meal_id = None
            name = _clean(source.name) or MANUAL_ENTRY_NAME
            nutrients = parse_nutrients(source.values)
            quantity = 1.0
        else:
            raise ValidationError(f"Unsupported consumption source: {source!r}")

        entry = self.repository.create_entry(
            user_id=user_id,
            meal_id=meal_id,
            name=name,
            nutrients=nutrients,
            quantity=quantity,
            consumed_on=consumed_on,
            notes=_clean(notes),
        )
        _logger.info(
            "Logged %s for user %s on %s", name, user_id, consumed_on.isoformat()
        )
        self._release_correction(user_id, consumed_on)
        return entry

    def list_log_entries(
        self, user_id: UUID, start: date, end: date
    ) -> list[LogEntry]:
        """Return entries in the date range, newest date first."""
        if end < start:
            raise ValidationError("End date must not be before start date")
        entries = self.repository.list_entries(user_id, start, end)
        return sorted(entries, key=lambda entry: entry.consumed_on, reverse=True)

    def delete_log_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete a user's log entry or raise NotFoundError."""
        entry = self.repository.delete_entry(user_id, entry_id)
        if entry is None:
            raise NotFoundError(f"Log entry not found: {entry_id}")
        self._release_correction(user_id, entry.consumed_on)

    def _resolve_meal(
        self, source: MealSource
    ) -> tuple[UUID | None, str, NutrientTotals]:
        try:
            meal = self.catalog_service.get_meal(source.meal_id)
        except NotFoundError as exc:
            raise SourceNotFoundError("meal", source.meal_id) from exc
        if source.components is None:
            return meal.id, meal.name, meal.nutrients.scaled(source.quantity)
        # Adjusted foods for this log only; the saved meal is left unchanged.
        nutrients = self.catalog_service.meal_composer.compute(source.components)
        return meal.id, meal.name, nutrients.scaled(source.quantity)

    def _release_correction(self, user_id: UUID, log_date: date) -> None:
        if self.corrections is not None:
            self.corrections.clear_correction(user_id, log_date)

    def _resolve_ad_hoc(
        self, user_id: UUID, source: AdHocSource
    ) -> tuple[UUID | None, str, NutrientTotals]:
        if source.save_as_meal:
            name = _clean(source.name)
            if name is None:
                raise ValidationError("A meal name is required to save the meal")
            meal = self.catalog_service.save_meal(
                user_id,
                MealDraft(
                    name=name,
                    composition=source.components,
                    description=_clean(source.description),
                ),
            )
            return meal.id, meal.name, meal.nutrients
        nutrients = self.catalog_service.meal_composer.compute(source.components)
        return None, _clean(source.name) or QUICK_MEAL_NAME, nutrients


def _check_quantity(quantity: float) -> None:
    if (
        isinstance(quantity, bool)
        or not isinstance(quantity, int | float)
        or not math.isfinite(quantity)
        or quantity <= 0
    ):
        raise ValidationError("Quantity must be greater than zero")


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None
