"""Nutrition composition over ingredients and foods."""

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.catalog import CompositionEntry
from calorie_tracker.domain.errors import (
    EmptyCompositionError,
    SourceNotFoundError,
    ValidationError,
)
from calorie_tracker.domain.nutrition import NutrientTotals, ReferenceServing
from calorie_tracker.services.units import UnitConverter


class NutritionComponent(Protocol):
    """Anything with nutrient values defined per a reference serving."""

    @property
    def nutrients(self) -> NutrientTotals:
        """Nutrient values per reference serving."""

    @property
    def reference(self) -> ReferenceServing:
        """Reference serving the values are defined per."""


@dataclass
class Composer:
    """Computes composite totals for one component kind.

    ``resolve`` maps component ids to components; the food composer resolves
    ingredients and the meal composer resolves foods by their stored totals.
    """

    kind: str
    resolve: Callable[[list[UUID]], Mapping[UUID, NutritionComponent]]
    converter: UnitConverter

    def compute(self, entries: Sequence[CompositionEntry]) -> NutrientTotals:
        """Return the weighted sum of the entries' component values."""
        if not entries:
            raise EmptyCompositionError(self.kind)
        for entry in entries:
            _check_quantity(entry)
        ids = list(dict.fromkeys(entry.component_id for entry in entries))
        components = self.resolve(ids)
        parts = []
        for entry in entries:
            component = components.get(entry.component_id)
            if component is None:
                raise SourceNotFoundError(self.kind, entry.component_id)
            parts.append((component, entry))
        return compose_totals(parts, self.converter)


def compose_totals(
    parts: Sequence[tuple[NutritionComponent, CompositionEntry]],
    converter: UnitConverter,
) -> NutrientTotals:
    """Sum component values scaled by each entry's multiplier.

    Sugar and fiber count as zero when a component lacks them and come back
    as None when their sum is zero.
    """
    total = NutrientTotals.zero()
    for component, entry in parts:
        factor = converter.multiplier(
            entry.quantity,
            entry.unit,
            component.reference.amount,
            component.reference.unit,
        )
        total = total.plus(component.nutrients.scaled(factor))
    return NutrientTotals(
        calories=total.calories,
        protein=total.protein,
        carbs=total.carbs,
        fat=total.fat,
        sugar=total.sugar or None,
        fiber=total.fiber or None,
    )


def _check_quantity(entry: CompositionEntry) -> None:
    quantity = entry.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise ValidationError(f"Invalid quantity: {quantity!r}")
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    if not entry.unit or not entry.unit.strip():
        raise ValidationError("Unit is required")
