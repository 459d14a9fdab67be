"""Domain models for ingredients, foods and meals."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import (
    DEFAULT_REFERENCE_SERVING,
    NutrientTotals,
    ReferenceServing,
)


@dataclass(frozen=True)
class CompositionEntry:
    """One component of a food or meal: an id scaled by quantity and unit."""

    component_id: UUID
    quantity: float
    unit: str


@dataclass(frozen=True)
class Ingredient:
    """Atomic nutrition facts per reference serving."""

    id: UUID
    name: str
    brand_name: str | None
    category: str
    reference: ReferenceServing
    nutrients: NutrientTotals
    description: str | None = None
    created_by: UUID | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Food:
    """A food with stored totals computed from its ingredients."""

    id: UUID
    name: str
    brand_name: str | None
    description: str | None
    category: str
    reference: ReferenceServing
    composition: list[CompositionEntry]
    nutrients: NutrientTotals
    created_by: UUID | None = None
    created_at: datetime | None = None

    @property
    def is_composite(self) -> bool:
        """Return True when the food combines more than one ingredient."""
        return len(self.composition) > 1


@dataclass(frozen=True)
class Meal:
    """A meal with stored totals computed from its foods."""

    id: UUID
    name: str
    description: str | None
    composition: list[CompositionEntry]
    nutrients: NutrientTotals
    created_by: UUID | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class IngredientDraft:
    """Unsaved ingredient fields."""

    name: str
    category: str
    reference: ReferenceServing
    nutrients: NutrientTotals
    brand_name: str | None = None
    description: str | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class FoodDraft:
    """Unsaved food fields; totals are computed on save."""

    name: str
    category: str
    composition: list[CompositionEntry]
    reference: ReferenceServing = DEFAULT_REFERENCE_SERVING
    brand_name: str | None = None
    description: str | None = None
    id: UUID | None = None


@dataclass(frozen=True)
class MealDraft:
    """Unsaved meal fields; totals are computed on save."""

    name: str
    composition: list[CompositionEntry] = field(default_factory=list)
    description: str | None = None
    id: UUID | None = None
