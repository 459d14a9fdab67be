"""Supabase implementation for ingredients, foods and meals."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    nutrient_columns,
    optional_uuid,
    parse_nutrients,
    parse_timestamp,
)
from calorie_tracker.domain.catalog import (
    CompositionEntry,
    Food,
    FoodDraft,
    Ingredient,
    IngredientDraft,
    Meal,
    MealDraft,
)
from calorie_tracker.domain.nutrition import NutrientTotals, ReferenceServing
from calorie_tracker.services.catalog import CatalogRepository

_FOOD_SELECT = "*, food_ingredients(ingredient_id, quantity, unit)"
_MEAL_SELECT = "*, meal_foods(food_id, quantity, unit)"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed catalog of ingredients, foods and meals."""

    client: Client

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def get_ingredients(self, ingredient_ids: list[UUID]) -> dict[UUID, Ingredient]:
        """Return the ingredients that exist among the ids."""
        if not ingredient_ids:
            return {}
        response = (
            self.client.table("ingredients")
            .select("*")
            .in_("id", [str(item) for item in ingredient_ids])
            .execute()
        )
        ingredients = [_parse_ingredient(row) for row in response.data or []]
        return {ingredient.id: ingredient for ingredient in ingredients}

    def list_ingredients(self) -> list[Ingredient]:
        """Return all ingredients ordered by name."""
        response = self.client.table("ingredients").select("*").order("name").execute()
        return [_parse_ingredient(row) for row in response.data or []]

    def create_ingredient(self, user_id: UUID, draft: IngredientDraft) -> Ingredient:
        """Create an ingredient and return it."""
        response = (
            self.client.table("ingredients")
            .insert({"created_by": str(user_id), **_ingredient_payload(draft)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create ingredient")
        return _parse_ingredient(response.data[0])

    def update_ingredient(
        self, ingredient_id: UUID, draft: IngredientDraft
    ) -> Ingredient:
        """Update an ingredient and return it."""
        response = (
            self.client.table("ingredients")
            .update(_ingredient_payload(draft))
            .eq("id", str(ingredient_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update ingredient")
        return _parse_ingredient(response.data[0])

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food with its composition, if present."""
        response = (
            self.client.table("foods")
            .select(_FOOD_SELECT)
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_foods(self, food_ids: list[UUID]) -> dict[UUID, Food]:
        """Return the foods that exist among the ids."""
        if not food_ids:
            return {}
        response = (
            self.client.table("foods")
            .select(_FOOD_SELECT)
            .in_("id", [str(item) for item in food_ids])
            .execute()
        )
        foods = [_parse_food(row) for row in response.data or []]
        return {food.id: food for food in foods}

    def list_foods(self) -> list[Food]:
        """Return all foods ordered by name."""
        response = (
            self.client.table("foods").select(_FOOD_SELECT).order("name").execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def create_food(
        self, user_id: UUID, draft: FoodDraft, nutrients: NutrientTotals
    ) -> Food:
        """Create a food row and its ingredient rows."""
        response = (
            self.client.table("foods")
            .insert({"created_by": str(user_id), **_food_payload(draft, nutrients)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food")
        row = response.data[0]
        food_id = UUID(row["id"])
        try:
            self._insert_food_ingredients(food_id, draft.composition)
        except Exception:
            _logger.exception("Failed to store ingredients for food %s", food_id)
            self.client.table("foods").delete().eq("id", str(food_id)).execute()
            raise
        ingredients = _entry_rows(draft.composition, "ingredient_id")
        return _parse_food({**row, "food_ingredients": ingredients})

    def update_food(
        self, food_id: UUID, draft: FoodDraft, nutrients: NutrientTotals
    ) -> Food:
        """Replace a food row and its ingredient rows, restoring both on failure."""
        previous = self.get_food(food_id)
        if previous is None:
            raise RuntimeError("Failed to update food")
        response = (
            self.client.table("foods")
            .update(_food_payload(draft, nutrients))
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food")
        try:
            self._replace_food_ingredients(food_id, draft.composition)
        except Exception:
            _logger.exception("Failed to replace ingredients for food %s", food_id)
            self._restore_food(previous)
            raise
        ingredients = _entry_rows(draft.composition, "ingredient_id")
        return _parse_food({**response.data[0], "food_ingredients": ingredients})

    def delete_food(self, food_id: UUID) -> bool:
        """Delete a food row."""
        response = self.client.table("foods").delete().eq("id", str(food_id)).execute()
        return bool(response.data)

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal with its composition, if present."""
        response = (
            self.client.table("meals")
            .select(_MEAL_SELECT)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self) -> list[Meal]:
        """Return all meals ordered by name."""
        response = (
            self.client.table("meals").select(_MEAL_SELECT).order("name").execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def create_meal(
        self, user_id: UUID, draft: MealDraft, nutrients: NutrientTotals
    ) -> Meal:
        """Create a meal row and its food rows."""
        response = (
            self.client.table("meals")
            .insert({"created_by": str(user_id), **_meal_payload(draft, nutrients)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        row = response.data[0]
        meal_id = UUID(row["id"])
        try:
            self._insert_meal_foods(meal_id, draft.composition)
        except Exception:
            _logger.exception("Failed to store foods for meal %s", meal_id)
            self.client.table("meals").delete().eq("id", str(meal_id)).execute()
            raise
        return _parse_meal(
            {**row, "meal_foods": _entry_rows(draft.composition, "food_id")}
        )

    def update_meal(
        self, meal_id: UUID, draft: MealDraft, nutrients: NutrientTotals
    ) -> Meal:
        """Replace a meal row and its food rows, restoring both on failure."""
        previous = self.get_meal(meal_id)
        if previous is None:
            raise RuntimeError("Failed to update meal")
        response = (
            self.client.table("meals")
            .update(_meal_payload(draft, nutrients))
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal")
        try:
            self._replace_meal_foods(meal_id, draft.composition)
        except Exception:
            _logger.exception("Failed to replace foods for meal %s", meal_id)
            self._restore_meal(previous)
            raise
        foods = _entry_rows(draft.composition, "food_id")
        return _parse_meal({**response.data[0], "meal_foods": foods})

    def delete_meal(self, meal_id: UUID) -> bool:
        """Delete a meal row; consumption rows only hold a loose reference."""
        response = self.client.table("meals").delete().eq("id", str(meal_id)).execute()
        return bool(response.data)

    def _replace_food_ingredients(
        self, food_id: UUID, composition: list[CompositionEntry]
    ) -> None:
        self.client.table("food_ingredients").delete().eq(
            "food_id", str(food_id)
        ).execute()
        self._insert_food_ingredients(food_id, composition)

    def _replace_meal_foods(
        self, meal_id: UUID, composition: list[CompositionEntry]
    ) -> None:
        self.client.table("meal_foods").delete().eq("meal_id", str(meal_id)).execute()
        self._insert_meal_foods(meal_id, composition)

    def _restore_food(self, food: Food) -> None:
        draft = FoodDraft(
            id=food.id,
            name=food.name,
            category=food.category,
            composition=food.composition,
            reference=food.reference,
            brand_name=food.brand_name,
            description=food.description,
        )
        try:
            self.client.table("foods").update(
                _food_payload(draft, food.nutrients)
            ).eq("id", str(food.id)).execute()
            self._replace_food_ingredients(food.id, food.composition)
        except Exception:
            _logger.exception("Failed to restore food %s", food.id)

    def _restore_meal(self, meal: Meal) -> None:
        draft = MealDraft(
            id=meal.id,
            name=meal.name,
            composition=meal.composition,
            description=meal.description,
        )
        try:
            self.client.table("meals").update(
                _meal_payload(draft, meal.nutrients)
            ).eq("id", str(meal.id)).execute()
            self._replace_meal_foods(meal.id, meal.composition)
        except Exception:
            _logger.exception("Failed to restore meal %s", meal.id)

    def _insert_food_ingredients(
        self, food_id: UUID, composition: list[CompositionEntry]
    ) -> None:
        payload = [
            {"food_id": str(food_id), **row}
            for row in _entry_rows(composition, "ingredient_id")
        ]
        if payload:
            self.client.table("food_ingredients").insert(payload).execute()

    def _insert_meal_foods(
        self, meal_id: UUID, composition: list[CompositionEntry]
    ) -> None:
        payload = [
            {"meal_id": str(meal_id), **row}
            for row in _entry_rows(composition, "food_id")
        ]
        if payload:
            self.client.table("meal_foods").insert(payload).execute()


def _entry_rows(
    composition: list[CompositionEntry], id_column: str
) -> list[dict[str, object]]:
    return [
        {
            id_column: str(entry.component_id),
            "quantity": entry.quantity,
            "unit": entry.unit,
        }
        for entry in composition
    ]


def _parse_entries(rows: object, id_column: str) -> list[CompositionEntry]:
    if not isinstance(rows, list):
        return []
    return [
        CompositionEntry(
            component_id=UUID(str(row[id_column])),
            quantity=float(row.get("quantity", 0.0)),
            unit=str(row.get("unit") or "servings"),
        )
        for row in rows
    ]


def _ingredient_payload(draft: IngredientDraft) -> dict[str, object]:
    return {
        "name": draft.name.strip(),
        "brand_name": draft.brand_name,
        "description": draft.description,
        "category": draft.category.strip(),
        "serving_amount": draft.reference.amount,
        "serving_unit": draft.reference.unit,
        **nutrient_columns(draft.nutrients),
    }


def _food_payload(draft: FoodDraft, nutrients: NutrientTotals) -> dict[str, object]:
    return {
        "name": draft.name.strip(),
        "brand_name": draft.brand_name,
        "description": draft.description,
        "category": draft.category.strip(),
        "reference_serving_amount": draft.reference.amount,
        "reference_serving_unit": draft.reference.unit,
        **nutrient_columns(nutrients),
    }


def _meal_payload(draft: MealDraft, nutrients: NutrientTotals) -> dict[str, object]:
    return {
        "name": draft.name.strip(),
        "description": draft.description,
        **nutrient_columns(nutrients),
    }


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    return Ingredient(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        brand_name=row.get("brand_name"),
        category=str(row.get("category", "")),
        reference=ReferenceServing(
            amount=float(row.get("serving_amount") or 0.0),
            unit=str(row.get("serving_unit") or ""),
        ),
        nutrients=parse_nutrients(row),
        description=row.get("description"),
        created_by=optional_uuid(row.get("created_by")),
        created_at=parse_timestamp(row.get("created_at")),
    )


def _parse_food(row: dict[str, object]) -> Food:
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        brand_name=row.get("brand_name"),
        description=row.get("description"),
        category=str(row.get("category", "")),
        reference=ReferenceServing(
            amount=float(row.get("reference_serving_amount") or 1.0),
            unit=str(row.get("reference_serving_unit") or "serving"),
        ),
        composition=_parse_entries(row.get("food_ingredients"), "ingredient_id"),
        nutrients=parse_nutrients(row),
        created_by=optional_uuid(row.get("created_by")),
        created_at=parse_timestamp(row.get("created_at")),
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        description=row.get("description"),
        composition=_parse_entries(row.get("meal_foods"), "food_id"),
        nutrients=parse_nutrients(row),
        created_by=optional_uuid(row.get("created_by")),
        created_at=parse_timestamp(row.get("created_at")),
    )
