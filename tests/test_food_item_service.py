"""Tests for the food item service."""

from dataclasses import replace

import pytest

from bitelog.domain.errors import (
    CyclicDependencyError,
    DuplicateNameError,
    IngredientNotFoundError,
    InvalidFoodItemError,
)
from bitelog.domain.models import FoodComponent
from tests.conftest import component_pairs, make_composite, make_food


def _seed_pastry(food_item_service):
    flour = food_item_service.create_food_item(make_food("Мука", 350, 10, 1, 70))
    sugar = food_item_service.create_food_item(make_food("Сахар", 300, 0, 0, 100))
    dough = food_item_service.create_food_item(
        make_composite("Тесто", [(flour.id, 150), (sugar.id, 50)])
    )
    return flour, sugar, dough


def test_create_composite_stores_resolved_macros(food_item_service) -> None:
    _, _, dough = _seed_pastry(food_item_service)

    assert dough.id is not None
    assert dough.calories_per_100g == pytest.approx(337.5)
    assert all(component.id is not None for component in dough.components)

    stored = food_item_service.get_food_item_by_name("Тесто")
    assert stored.calories_per_100g == pytest.approx(337.5)
    assert stored.carbs_per_100g == pytest.approx(77.5)


def test_nested_pie_regression_through_storage(food_item_service) -> None:
    _, sugar, dough = _seed_pastry(food_item_service)

    pie = food_item_service.create_food_item(
        make_composite("Пирог", [(sugar.id, 100), (dough.id, 500)])
    )

    loaded = food_item_service.get_food_item_by_id(pie.id)
    assert loaded.calories_per_100g == pytest.approx(331.25)
    assert loaded.proteins_per_100g == pytest.approx(6.25)
    assert loaded.fats_per_100g == pytest.approx(0.625)
    assert loaded.carbs_per_100g == pytest.approx(81.25)


def test_create_rejects_duplicate_name(food_item_service) -> None:
    food_item_service.create_food_item(make_food("Мука", 350, 10, 1, 70))

    with pytest.raises(DuplicateNameError):
        food_item_service.create_food_item(make_food("Мука", 340, 9, 1, 72))


def test_create_rejects_missing_ingredient(food_item_service) -> None:
    with pytest.raises(IngredientNotFoundError):
        food_item_service.create_food_item(make_composite("Тесто", [(999, 100)]))

    assert food_item_service.get_food_item_by_name("Тесто") is None


def test_create_rejects_composite_without_components(food_item_service) -> None:
    with pytest.raises(InvalidFoodItemError):
        food_item_service.create_food_item(make_composite("Пусто", []))


def test_create_rejects_negative_component_amount(food_item_service) -> None:
    flour = food_item_service.create_food_item(make_food("Мука", 350, 10, 1, 70))

    with pytest.raises(InvalidFoodItemError):
        food_item_service.create_food_item(make_composite("Тесто", [(flour.id, -5)]))


def test_update_rejects_cycle_and_keeps_stored_graph(food_item_service) -> None:
    flour, _, dough = _seed_pastry(food_item_service)
    pie = food_item_service.create_food_item(make_composite("Пирог", [(dough.id, 100)]))

    cyclic = make_composite(
        "Тесто", [(flour.id, 150), (pie.id, 10)], food_item_id=dough.id
    )
    with pytest.raises(CyclicDependencyError):
        food_item_service.update_food_item(cyclic)

    stored = food_item_service.get_food_item_by_id(dough.id)
    assert {ingredient for ingredient, _ in component_pairs(stored)} == {
        flour.id,
        food_item_service.get_food_item_by_name("Сахар").id,
    }


def test_update_rejects_self_reference(food_item_service) -> None:
    flour, _, dough = _seed_pastry(food_item_service)

    with pytest.raises(CyclicDependencyError):
        food_item_service.update_food_item(
            make_composite("Тесто", [(flour.id, 100), (dough.id, 1)], food_item_id=dough.id)
        )


def test_update_without_id_is_invalid(food_item_service) -> None:
    with pytest.raises(InvalidFoodItemError):
        food_item_service.update_food_item(make_food("Мука", 350, 10, 1, 70))


def test_update_rejects_name_of_another_item(food_item_service) -> None:
    flour, sugar, _ = _seed_pastry(food_item_service)

    with pytest.raises(DuplicateNameError):
        food_item_service.update_food_item(replace(sugar, name=flour.name))


def test_update_missing_item_returns_none(food_item_service) -> None:
    assert (
        food_item_service.update_food_item(
            make_food("Призрак", 1, 1, 1, 1, food_item_id=404)
        )
        is None
    )


def test_update_replaces_components_and_recomputes(food_item_service) -> None:
    _, sugar, dough = _seed_pastry(food_item_service)

    updated = food_item_service.update_food_item(
        replace(
            dough,
            components=(FoodComponent(ingredient_food_item_id=sugar.id, amount_in_grams=80),),
        )
    )

    assert component_pairs(updated) == [(sugar.id, 80.0)]
    assert updated.calories_per_100g == pytest.approx(300)
    assert updated.proteins_per_100g == pytest.approx(0)
    old_ids = {component.id for component in dough.components}
    assert not old_ids & {component.id for component in updated.components}


def test_ingredient_change_is_visible_in_dependents(food_item_service) -> None:
    flour, _, dough = _seed_pastry(food_item_service)

    food_item_service.update_food_item(replace(flour, calories_per_100g=450))

    reloaded = food_item_service.get_food_item_by_id(dough.id)
    assert reloaded.calories_per_100g == pytest.approx((450 * 150 + 300 * 50) / 200)


def test_delete_ingredient_cascades_to_components(food_item_service) -> None:
    flour, sugar, dough = _seed_pastry(food_item_service)

    assert food_item_service.delete_food_item(sugar.id) is True

    reloaded = food_item_service.get_food_item_by_id(dough.id)
    assert component_pairs(reloaded) == [(flour.id, 150.0)]
    assert reloaded.calories_per_100g == pytest.approx(350)


def test_delete_missing_item_returns_false(food_item_service) -> None:
    assert food_item_service.delete_food_item(404) is False


def test_list_food_items_resolves_composites(food_item_service) -> None:
    _seed_pastry(food_item_service)

    items = food_item_service.list_food_items()

    assert [item.name for item in items] == ["Мука", "Сахар", "Тесто"]
    assert items[2].calories_per_100g == pytest.approx(337.5)


def test_list_food_items_without_components(food_item_service) -> None:
    _seed_pastry(food_item_service)

    items = food_item_service.list_food_items(load_components=False)

    assert all(item.components is None for item in items)
