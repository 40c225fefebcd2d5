"""Tests for library service."""

from food_log.domain.nutrition import ServingUnit
from tests.conftest import make_food_input


def test_create_food_stamps_creation_time(container) -> None:
    service = container.library_service

    food_id = service.create_food(make_food_input(name="Yogurt"))
    food = service.get_food(food_id)

    assert food.name == "Yogurt"
    assert food.created_at.tzinfo is not None


def test_edit_food_returns_updated_record(container) -> None:
    service = container.library_service
    food_id = service.create_food(make_food_input())

    food = service.edit_food(
        food_id,
        make_food_input(name="Soy Milk", serving_unit=ServingUnit.MILLILITERS),
    )

    assert food.id == food_id
    assert food.name == "Soy Milk"
    assert food.serving_unit is ServingUnit.MILLILITERS


def test_servings_through_service(container) -> None:
    service = container.library_service
    food_id = service.create_food(make_food_input())

    serving_id = service.add_serving(food_id, "scoop", 30.0)
    assert [serving.name for serving in service.list_servings(food_id)] == ["scoop"]

    service.delete_serving(serving_id)
    assert service.list_servings(food_id) == []


def test_list_and_count_foods(container) -> None:
    service = container.library_service
    service.create_food(make_food_input(name="Pear"))
    service.create_food(make_food_input(name="Apple"))

    assert [food.name for food in service.list_foods()] == ["Apple", "Pear"]
    assert service.count_foods() == 2
