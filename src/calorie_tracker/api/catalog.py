"""Ingredient, food and meal endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from calorie_tracker.api.deps import current_user_id, get_container
from calorie_tracker.api.models import FoodIn, IngredientIn, MealIn
from calorie_tracker.api.serializers import (
    serialize_food,
    serialize_ingredient,
    serialize_meal,
)
from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["catalog"], dependencies=[Depends(current_user_id)])


@router.get("/ingredients")
async def list_ingredients(
    q: str | None = None,
    category: str | None = None,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Search ingredients by name or brand and category."""
    ingredients = container.catalog_service.list_ingredients(q, category)
    return {"ingredients": [serialize_ingredient(item) for item in ingredients]}


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    payload: IngredientIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    ingredient = container.catalog_service.save_ingredient(
        user_id, payload.to_draft()
    )
    return serialize_ingredient(ingredient)


@router.get("/ingredients/{ingredient_id}")
async def get_ingredient(
    ingredient_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return serialize_ingredient(container.catalog_service.get_ingredient(ingredient_id))


@router.put("/ingredients/{ingredient_id}")
async def update_ingredient(
    ingredient_id: UUID,
    payload: IngredientIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update an ingredient; dependent foods keep their totals until refreshed."""
    ingredient = container.catalog_service.save_ingredient(
        user_id, payload.to_draft(ingredient_id)
    )
    return serialize_ingredient(ingredient)


@router.get("/foods")
async def list_foods(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    foods = container.catalog_service.list_foods()
    return {"foods": [serialize_food(food) for food in foods]}


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a food and compute its totals from its ingredients."""
    food = container.catalog_service.save_food(user_id, payload.to_draft())
    return serialize_food(food)


@router.get("/foods/{food_id}")
async def get_food(
    food_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return serialize_food(container.catalog_service.get_food(food_id))


@router.put("/foods/{food_id}")
async def update_food(
    food_id: UUID,
    payload: FoodIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    food = container.catalog_service.save_food(user_id, payload.to_draft(food_id))
    return serialize_food(food)


@router.post("/foods/{food_id}/refresh")
async def refresh_food(
    food_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Recompute a food's totals from current ingredient values."""
    return serialize_food(container.catalog_service.refresh_food(food_id))


@router.delete("/foods/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    food_id: UUID, container: AppContainer = Depends(get_container)
) -> Response:
    container.catalog_service.delete_food(food_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/meals")
async def list_meals(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    meals = container.catalog_service.list_meals()
    return {"meals": [serialize_meal(meal) for meal in meals]}


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def create_meal(
    payload: MealIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a meal and compute its totals from its foods."""
    meal = container.catalog_service.save_meal(user_id, payload.to_draft())
    return serialize_meal(meal)


@router.get("/meals/{meal_id}")
async def get_meal(
    meal_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return serialize_meal(container.catalog_service.get_meal(meal_id))


@router.put("/meals/{meal_id}")
async def update_meal(
    meal_id: UUID,
    payload: MealIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    meal = container.catalog_service.save_meal(user_id, payload.to_draft(meal_id))
    return serialize_meal(meal)


@router.post("/meals/{meal_id}/refresh")
async def refresh_meal(
    meal_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Recompute a meal's totals from its foods' stored totals."""
    return serialize_meal(container.catalog_service.refresh_meal(meal_id))


@router.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: UUID, container: AppContainer = Depends(get_container)
) -> Response:
    """Delete a meal; logged consumption keeps its snapshot."""
    container.catalog_service.delete_meal(meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
