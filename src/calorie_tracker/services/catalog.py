"""Services for ingredients, foods and meals."""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.catalog import (
    Food,
    FoodDraft,
    Ingredient,
    IngredientDraft,
    Meal,
    MealDraft,
)
from calorie_tracker.domain.errors import NotFoundError, ValidationError
from calorie_tracker.domain.nutrition import NutrientTotals, check_nutrients
from calorie_tracker.services.composer import Composer
from calorie_tracker.services.units import UnitConverter

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for ingredients, foods and meals."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def get_ingredients(self, ingredient_ids: list[UUID]) -> dict[UUID, Ingredient]:
        """Return the ingredients that exist among the ids."""

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients ordered by name."""

    def create_ingredient(self, user_id: UUID, draft: IngredientDraft) -> Ingredient:
        """Create an ingredient and return it."""

    def update_ingredient(
        self, ingredient_id: UUID, draft: IngredientDraft
    ) -> Ingredient:
        """Update an ingredient and return it."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food with its composition, if present."""

    def get_foods(self, food_ids: list[UUID]) -> dict[UUID, Food]:
        """Return the foods that exist among the ids."""

    def list_foods(self) -> list[Food]:
        """Return all foods ordered by name."""

    def create_food(
        self, user_id: UUID, draft: FoodDraft, nutrients: NutrientTotals
    ) -> Food:
        """Create a food with its composition and computed totals."""

    def update_food(
        self, food_id: UUID, draft: FoodDraft, nutrients: NutrientTotals
    ) -> Food:
        """Replace a food's fields, composition and totals."""

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food; return False when it did not exist."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal with its composition, if present."""

    def list_meals(self) -> list[Meal]:
        """Return all meals ordered by name."""

    def create_meal(
        self, user_id: UUID, draft: MealDraft, nutrients: NutrientTotals
    ) -> Meal:
        """Create a meal with its composition and computed totals."""

    def update_meal(
        self, meal_id: UUID, draft: MealDraft, nutrients: NutrientTotals
    ) -> Meal:
        """Replace a meal's fields, composition and totals."""

    def delete_meal(self, meal_id: UUID) -> bool:
        """Delete a meal; return False when it did not exist."""


@dataclass
class CatalogService:
    """Application service for the ingredient, food and meal catalog."""

    repository: CatalogRepository
    converter: UnitConverter = field(default_factory=UnitConverter)

    @property
    def food_composer(self) -> Composer:
        """Composer that sums ingredients into food totals."""
        return Composer(
            kind="ingredient",
            resolve=self.repository.get_ingredients,
            converter=self.converter,
        )

    @property
    def meal_composer(self) -> Composer:
        """Composer that sums foods' stored totals into meal totals."""
        return Composer(
            kind="food",
            resolve=self.repository.get_foods,
            converter=self.converter,
        )

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient:
        """Return an ingredient or raise NotFoundError."""
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None:
            raise NotFoundError(f"Ingredient not found: {ingredient_id}")
        return ingredient

    def list_ingredients(
        self, query: str | None = None, category: str | None = None
    ) -> list[Ingredient]:
        """List ingredients, filtered by name/brand text and category."""
        ingredients = self.repository.list_ingredients()
        if category:
            ingredients = [item for item in ingredients if item.category == category]
        if query:
            needle = query.lower()
            ingredients = [
                item
                for item in ingredients
                if needle in item.name.lower()
                or needle in (item.brand_name or "").lower()
            ]
        return ingredients

    def save_ingredient(self, user_id: UUID, draft: IngredientDraft) -> Ingredient:
        """Validate and create or update an ingredient.

        Foods and meals computed from the ingredient keep their stored totals
        until they are saved or refreshed.
        """
        _require_text(draft.name, "name")
        _require_text(draft.category, "category")
        _check_reference_amount(draft.reference.amount)
        _require_text(draft.reference.unit, "reference unit")
        cleaned = replace(draft, nutrients=check_nutrients(draft.nutrients))
        if draft.id is None:
            return self.repository.create_ingredient(user_id, cleaned)
        self.get_ingredient(draft.id)
        return self.repository.update_ingredient(draft.id, cleaned)

    def get_food(self, food_id: UUID) -> Food:
        """Return a food or raise NotFoundError."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError(f"Food not found: {food_id}")
        return food

    def list_foods(self) -> list[Food]:
        """List all foods."""
        return self.repository.list_foods()

    def save_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Compute a food's totals from its ingredients and persist both."""
        _require_text(draft.name, "name")
        _require_text(draft.category, "category")
        _check_reference_amount(draft.reference.amount)
        _require_text(draft.reference.unit, "reference unit")
        nutrients = self.food_composer.compute(draft.composition)
        if draft.id is None:
            food = self.repository.create_food(user_id, draft, nutrients)
        else:
            self.get_food(draft.id)
            food = self.repository.update_food(draft.id, draft, nutrients)
        _logger.info(
            "Saved food %s with %s ingredient(s)", food.id, len(draft.composition)
        )
        return food

    def refresh_food(self, food_id: UUID) -> Food:
        """Recompute a food's stored totals from current ingredient values."""
        food = self.get_food(food_id)
        draft = FoodDraft(
            id=food.id,
            name=food.name,
            category=food.category,
            composition=food.composition,
            reference=food.reference,
            brand_name=food.brand_name,
            description=food.description,
        )
        nutrients = self.food_composer.compute(draft.composition)
        return self.repository.update_food(food.id, draft, nutrients)

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food or raise NotFoundError."""
        if not self.repository.delete_food(food_id):
            raise NotFoundError(f"Food not found: {food_id}")

    def get_meal(self, meal_id: UUID) -> Meal:
        """Return a meal or raise NotFoundError."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal not found: {meal_id}")
        return meal

    def list_meals(self) -> list[Meal]:
        """List all meals."""
        return self.repository.list_meals()

    def save_meal(self, user_id: UUID, draft: MealDraft) -> Meal:
        """Compute a meal's totals from its foods and persist both."""
        _require_text(draft.name, "name")
        nutrients = self.meal_composer.compute(draft.composition)
        if draft.id is None:
            meal = self.repository.create_meal(user_id, draft, nutrients)
        else:
            self.get_meal(draft.id)
            meal = self.repository.update_meal(draft.id, draft, nutrients)
        _logger.info("Saved meal %s with %s food(s)", meal.id, len(draft.composition))
        return meal

    def refresh_meal(self, meal_id: UUID) -> Meal:
        """Recompute a meal's stored totals from its foods' stored totals."""
        meal = self.get_meal(meal_id)
        draft = MealDraft(
            id=meal.id,
            name=meal.name,
            composition=meal.composition,
            description=meal.description,
        )
        nutrients = self.meal_composer.compute(draft.composition)
        return self.repository.update_meal(meal.id, draft, nutrients)

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal; logged consumption keeps its snapshot."""
        if not self.repository.delete_meal(meal_id):
            raise NotFoundError(f"Meal not found: {meal_id}")


def _require_text(value: str | None, label: str) -> None:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")


def _check_reference_amount(amount: float) -> None:
    if (
        isinstance(amount, bool)
        or not isinstance(amount, int | float)
        or not math.isfinite(amount)
        or amount <= 0
    ):
        raise ValidationError("Reference serving amount must be greater than zero")
