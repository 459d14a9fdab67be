"""Tests for the ingredient, food and meal catalog service."""

from dataclasses import replace
from uuid import uuid4

import pytest

from calorie_tracker.domain.catalog import (
    CompositionEntry,
    FoodDraft,
    IngredientDraft,
    MealDraft,
)
from calorie_tracker.domain.errors import (
    EmptyCompositionError,
    NotFoundError,
    SourceNotFoundError,
    UnitMismatchError,
    ValidationError,
)
from calorie_tracker.domain.nutrition import NutrientTotals, ReferenceServing
from calorie_tracker.services.catalog import CatalogService
from tests.conftest import CHICKEN, InMemoryCatalogRepository, make_ingredient


def _ingredient_draft(**overrides: object) -> IngredientDraft:
    draft = IngredientDraft(
        name="Oats",
        category="grain",
        reference=ReferenceServing(amount=40, unit="g"),
        nutrients=NutrientTotals(calories=150, protein=5, carbs=27, fat=3, fiber=4),
    )
    return replace(draft, **overrides)


def test_save_ingredient_creates_and_updates(catalog_service, user_id) -> None:
    created = catalog_service.save_ingredient(user_id, _ingredient_draft())

    updated = catalog_service.save_ingredient(
        user_id, _ingredient_draft(id=created.id, name="Rolled oats")
    )

    assert updated.id == created.id
    assert catalog_service.get_ingredient(created.id).name == "Rolled oats"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"category": ""},
        {"reference": ReferenceServing(amount=0, unit="g")},
        {"reference": ReferenceServing(amount=40, unit="")},
        {"nutrients": NutrientTotals(calories=-1, protein=5, carbs=27, fat=3)},
    ],
)
def test_save_ingredient_rejects_invalid_fields(
    catalog_service, user_id, overrides: dict[str, object]
) -> None:
    with pytest.raises(ValidationError):
        catalog_service.save_ingredient(user_id, _ingredient_draft(**overrides))


def test_update_of_unknown_ingredient_is_not_found(catalog_service, user_id) -> None:
    with pytest.raises(NotFoundError):
        catalog_service.save_ingredient(user_id, _ingredient_draft(id=uuid4()))


def test_list_ingredients_filters_by_text_and_category(
    catalog_service, catalog_repository, user_id
) -> None:
    make_ingredient(catalog_repository)
    oats = catalog_service.save_ingredient(
        user_id, _ingredient_draft(brand_name="Quaker")
    )

    assert catalog_service.list_ingredients(query="quak") == [oats]
    assert catalog_service.list_ingredients(category="grain") == [oats]
    assert len(catalog_service.list_ingredients()) == 2


def test_save_food_computes_totals(
    catalog_service, catalog_repository, user_id
) -> None:
    chicken = make_ingredient(catalog_repository)

    food = catalog_service.save_food(
        user_id,
        FoodDraft(
            name="Grilled chicken",
            category="protein",
            composition=[CompositionEntry(chicken.id, 150, "g")],
        ),
    )

    assert food.nutrients.calories == pytest.approx(247.5)
    assert food.nutrients.protein == pytest.approx(46.5)
    assert not food.is_composite


def test_save_food_without_ingredients_persists_nothing(
    catalog_service, catalog_repository, user_id
) -> None:
    with pytest.raises(EmptyCompositionError):
        catalog_service.save_food(
            user_id, FoodDraft(name="Air", category="misc", composition=[])
        )

    assert catalog_repository.foods == {}


def test_save_food_with_unknown_ingredient_persists_nothing(
    catalog_service, catalog_repository, user_id
) -> None:
    with pytest.raises(SourceNotFoundError):
        catalog_service.save_food(
            user_id,
            FoodDraft(
                name="Mystery",
                category="misc",
                composition=[CompositionEntry(uuid4(), 1, "servings")],
            ),
        )

    assert catalog_repository.foods == {}


def test_food_keeps_totals_until_refreshed(
    catalog_service, catalog_repository, user_id
) -> None:
    chicken = make_ingredient(catalog_repository)
    food = catalog_service.save_food(
        user_id,
        FoodDraft(
            name="Grilled chicken",
            category="protein",
            composition=[CompositionEntry(chicken.id, 100, "g")],
        ),
    )
    catalog_service.save_ingredient(
        user_id,
        IngredientDraft(
            id=chicken.id,
            name=chicken.name,
            category=chicken.category,
            reference=chicken.reference,
            nutrients=replace(CHICKEN, calories=200.0),
        ),
    )

    assert catalog_service.get_food(food.id).nutrients.calories == pytest.approx(165)

    refreshed = catalog_service.refresh_food(food.id)

    assert refreshed.nutrients.calories == pytest.approx(200)


def test_meal_passes_through_food_totals(
    catalog_service, catalog_repository, user_id
) -> None:
    chicken = make_ingredient(catalog_repository)
    food = catalog_service.save_food(
        user_id,
        FoodDraft(
            name="Grilled chicken",
            category="protein",
            composition=[CompositionEntry(chicken.id, 150, "g")],
        ),
    )

    meal = catalog_service.save_meal(
        user_id,
        MealDraft(
            name="Chicken dinner",
            composition=[CompositionEntry(food.id, 1, "servings")],
        ),
    )

    assert meal.nutrients == food.nutrients


def test_meal_uses_stored_food_totals_until_refreshed(
    catalog_service, catalog_repository, user_id
) -> None:
    chicken = make_ingredient(catalog_repository)
    food = catalog_service.save_food(
        user_id,
        FoodDraft(
            name="Grilled chicken",
            category="protein",
            composition=[CompositionEntry(chicken.id, 100, "g")],
        ),
    )
    meal = catalog_service.save_meal(
        user_id,
        MealDraft(
            name="Chicken dinner",
            composition=[CompositionEntry(food.id, 2, "servings")],
        ),
    )
    catalog_service.save_food(
        user_id,
        FoodDraft(
            id=food.id,
            name=food.name,
            category=food.category,
            composition=[CompositionEntry(chicken.id, 200, "g")],
        ),
    )

    assert catalog_service.get_meal(meal.id).nutrients.calories == pytest.approx(330)
    assert catalog_service.refresh_meal(meal.id).nutrients.calories == pytest.approx(
        660
    )


def test_meal_rejects_unit_food_cannot_convert(
    catalog_service, catalog_repository, user_id
) -> None:
    chicken = make_ingredient(catalog_repository)
    food = catalog_service.save_food(
        user_id,
        FoodDraft(
            name="Grilled chicken",
            category="protein",
            composition=[CompositionEntry(chicken.id, 100, "g")],
        ),
    )

    with pytest.raises(UnitMismatchError):
        catalog_service.save_meal(
            user_id,
            MealDraft(
                name="Chicken dinner",
                composition=[CompositionEntry(food.id, 100, "g")],
            ),
        )


def test_meal_requires_a_name(catalog_service, user_id) -> None:
    with pytest.raises(ValidationError):
        catalog_service.save_meal(user_id, MealDraft(name=" "))


def test_delete_unknown_food_and_meal_is_not_found(catalog_service) -> None:
    with pytest.raises(NotFoundError):
        catalog_service.delete_food(uuid4())
    with pytest.raises(NotFoundError):
        catalog_service.delete_meal(uuid4())


def test_lenient_converter_uses_quantity_as_multiplier(user_id) -> None:
    repository = InMemoryCatalogRepository()
    service = CatalogService(repository)
    service = replace(service, converter=replace(service.converter, strict=False))
    chicken = make_ingredient(repository)

    food = service.save_food(
        user_id,
        FoodDraft(
            name="Chicken pieces",
            category="protein",
            composition=[CompositionEntry(chicken.id, 2, "piece")],
        ),
    )

    assert food.nutrients.calories == pytest.approx(330)
