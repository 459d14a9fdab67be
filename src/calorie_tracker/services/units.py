"""Unit-aware scaling of composition quantities."""

import logging
import math
from dataclasses import dataclass

from calorie_tracker.domain.errors import InvalidReferenceError, UnitMismatchError

SERVINGS_UNIT = "servings"

_MASS_IN_GRAMS = {
    "mg": 0.001,
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.349523125,
    "lb": 453.59237,
}

_VOLUME_IN_ML = {
    "ml": 1.0,
    "l": 1000.0,
    "tsp": 4.92892159375,
    "tbsp": 14.78676478125,
    "fl oz": 29.5735295625,
    "cup": 236.5882365,
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitConverter:
    """Turns a quantity and unit into a count of reference servings.

    With ``strict`` set, a unit that is neither the servings sentinel, the
    reference unit, nor convertible to it raises ``UnitMismatchError``.
    Otherwise the quantity is used as a raw multiplier.
    """

    strict: bool = True

    def multiplier(
        self,
        quantity: float,
        unit: str,
        reference_amount: float,
        reference_unit: str,
    ) -> float:
        """Return how many reference servings ``quantity unit`` represents."""
        if (
            reference_amount is None
            or not math.isfinite(reference_amount)
            or reference_amount <= 0
        ):
            raise InvalidReferenceError(
                f"Reference amount must be positive, got {reference_amount!r}"
            )
        if unit == SERVINGS_UNIT:
            return quantity
        if unit == reference_unit:
            return quantity / reference_amount
        converted = convert(quantity, unit, reference_unit)
        if converted is not None:
            return converted / reference_amount
        if self.strict:
            raise UnitMismatchError(unit, reference_unit)
        _logger.warning(
            "No conversion from %s to %s, using quantity as multiplier",
            unit,
            reference_unit,
        )
        return quantity


def convert(quantity: float, unit: str, target_unit: str) -> float | None:
    """Convert between mass or volume units, or return None if impossible."""
    for table in (_MASS_IN_GRAMS, _VOLUME_IN_ML):
        if unit in table and target_unit in table:
            return quantity * table[unit] / table[target_unit]
    return None
