"""Pydantic models for API request payloads."""

from datetime import date
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from calorie_tracker.domain.catalog import (
    CompositionEntry,
    FoodDraft,
    IngredientDraft,
    MealDraft,
)
from calorie_tracker.domain.consumption import (
    AdHocSource,
    ConsumptionSource,
    ManualSource,
    MealSource,
)
from calorie_tracker.domain.nutrition import ReferenceServing, parse_nutrients
from calorie_tracker.services.units import SERVINGS_UNIT


class NutrientsIn(BaseModel):
    """Six nutrient values; validated by the domain layer."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    sugar: float | None = None
    fiber: float | None = None

    def values(self) -> dict[str, object]:
        """Return the raw values keyed by nutrient name."""
        return self.model_dump()


class ReferenceServingIn(BaseModel):
    """Reference serving payload."""

    amount: float = Field(gt=0)
    unit: str = Field(min_length=1)

    def to_domain(self) -> ReferenceServing:
        """Convert to the domain value."""
        return ReferenceServing(amount=self.amount, unit=self.unit)


class CompositionEntryIn(BaseModel):
    """One component id with quantity and unit."""

    component_id: UUID
    quantity: float = Field(gt=0)
    unit: str = SERVINGS_UNIT

    def to_domain(self) -> CompositionEntry:
        """Convert to the domain value."""
        return CompositionEntry(
            component_id=self.component_id, quantity=self.quantity, unit=self.unit
        )


class IngredientIn(BaseModel):
    """Ingredient create/update payload."""

    name: str
    category: str
    reference: ReferenceServingIn
    nutrients: NutrientsIn
    brand_name: str | None = None
    description: str | None = None

    def to_draft(self, ingredient_id: UUID | None = None) -> IngredientDraft:
        """Convert to an ingredient draft."""
        return IngredientDraft(
            id=ingredient_id,
            name=self.name,
            category=self.category,
            reference=self.reference.to_domain(),
            nutrients=parse_nutrients(self.nutrients.values()),
            brand_name=self.brand_name,
            description=self.description,
        )


class FoodIn(BaseModel):
    """Food create/update payload."""

    name: str
    category: str
    composition: list[CompositionEntryIn]
    reference: ReferenceServingIn = ReferenceServingIn(amount=1, unit="serving")
    brand_name: str | None = None
    description: str | None = None

    def to_draft(self, food_id: UUID | None = None) -> FoodDraft:
        """Convert to a food draft."""
        return FoodDraft(
            id=food_id,
            name=self.name,
            category=self.category,
            composition=[entry.to_domain() for entry in self.composition],
            reference=self.reference.to_domain(),
            brand_name=self.brand_name,
            description=self.description,
        )


class MealIn(BaseModel):
    """Meal create/update payload."""

    name: str
    composition: list[CompositionEntryIn]
    description: str | None = None

    def to_draft(self, meal_id: UUID | None = None) -> MealDraft:
        """Convert to a meal draft."""
        return MealDraft(
            id=meal_id,
            name=self.name,
            composition=[entry.to_domain() for entry in self.composition],
            description=self.description,
        )


class MealSourceIn(BaseModel):
    """Log a saved meal."""

    type: Literal["meal"]
    meal_id: UUID
    quantity: float = Field(default=1.0, gt=0)
    components: list[CompositionEntryIn] | None = None


class AdHocSourceIn(BaseModel):
    """Log a one-off combination of foods."""

    type: Literal["adhoc"]
    components: list[CompositionEntryIn]
    name: str | None = None
    description: str | None = None
    save_as_meal: bool = False


class ManualSourceIn(NutrientsIn):
    """Log nutrient values entered directly."""

    type: Literal["manual"]
    name: str | None = None

    def values(self) -> dict[str, object]:
        """Return only the nutrient values."""
        return self.model_dump(exclude={"type", "name"})


class ConsumptionIn(BaseModel):
    """Consumption log payload."""

    consumed_on: date
    source: Annotated[
        MealSourceIn | AdHocSourceIn | ManualSourceIn, Field(discriminator="type")
    ]
    notes: str | None = None

    def to_source(self) -> ConsumptionSource:
        """Convert the source payload to a domain source."""
        source = self.source
        if isinstance(source, MealSourceIn):
            components = None
            if source.components is not None:
                components = [entry.to_domain() for entry in source.components]
            return MealSource(
                meal_id=source.meal_id,
                quantity=source.quantity,
                components=components,
            )
        if isinstance(source, AdHocSourceIn):
            return AdHocSource(
                components=[entry.to_domain() for entry in source.components],
                name=source.name,
                description=source.description,
                save_as_meal=source.save_as_meal,
            )
        return ManualSource(values=source.values(), name=source.name)
