"""Nutrition domain models."""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from calorie_tracker.domain.errors import ValidationError

REQUIRED_NUTRIENTS = ("calories", "protein", "carbs", "fat")
OPTIONAL_NUTRIENTS = ("sugar", "fiber")
NUTRIENT_FIELDS = REQUIRED_NUTRIENTS + OPTIONAL_NUTRIENTS


@dataclass(frozen=True)
class NutrientTotals:
    """Six nutrient values; sugar and fiber may be unknown."""

    calories: float
    protein: float
    carbs: float
    fat: float
    sugar: float | None = None
    fiber: float | None = None

    @classmethod
    def zero(cls) -> "NutrientTotals":
        """Return all-zero totals with sugar and fiber counted as zero."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def scaled(self, factor: float) -> "NutrientTotals":
        """Return values multiplied by factor, keeping unknown fields unknown."""
        return NutrientTotals(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
            sugar=self.sugar * factor if self.sugar is not None else None,
            fiber=self.fiber * factor if self.fiber is not None else None,
        )

    def plus(self, other: "NutrientTotals") -> "NutrientTotals":
        """Return the elementwise sum, treating unknown sugar/fiber as zero."""
        return NutrientTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            sugar=(self.sugar or 0.0) + (other.sugar or 0.0),
            fiber=(self.fiber or 0.0) + (other.fiber or 0.0),
        )

    def as_dict(self) -> dict[str, float | None]:
        """Return the values keyed by nutrient name."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}


@dataclass(frozen=True)
class ReferenceServing:
    """Amount and unit that stored nutrient values are defined per."""

    amount: float
    unit: str


DEFAULT_REFERENCE_SERVING = ReferenceServing(amount=1.0, unit="serving")


def parse_nutrients(
    values: Mapping[str, object],
    *,
    require_positive: bool = False,
) -> NutrientTotals:
    """Parse raw nutrient values into totals.

    Calories, protein, carbs and fat must be present. Sugar and fiber are
    optional; a missing, ``None`` or blank value means unknown. Every present
    value must be a finite number, non-negative or, with ``require_positive``,
    strictly positive.
    """
    parsed: dict[str, float | None] = {}
    for name in NUTRIENT_FIELDS:
        raw = values.get(name)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            if name in REQUIRED_NUTRIENTS:
                raise ValidationError(f"Missing required nutrient: {name}")
            parsed[name] = None
            continue
        parsed[name] = _parse_amount(name, raw, require_positive=require_positive)
    return NutrientTotals(**parsed)


def check_nutrients(totals: NutrientTotals) -> NutrientTotals:
    """Validate already-typed totals and return them unchanged."""
    return parse_nutrients(totals.as_dict())


def _parse_amount(name: str, raw: object, *, require_positive: bool) -> float:
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid value for {name}: {raw!r}")
    if isinstance(raw, int | float):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise ValidationError(f"Invalid value for {name}: {raw!r}") from None
    else:
        raise ValidationError(f"Invalid value for {name}: {raw!r}")
    if not math.isfinite(value):
        raise ValidationError(f"Invalid value for {name}: {raw!r}")
    if require_positive and value <= 0:
        raise ValidationError(f"{name} must be greater than zero")
    if value < 0:
        raise ValidationError(f"{name} must not be negative")
    return value
