"""Tests for nutrition arithmetic and serving units."""

import pytest

from food_log.domain.nutrition import (
    NUTRIENT_FIELDS,
    Nutrition,
    ServingUnit,
    add,
    sum_nutrition,
)
from food_log.errors import ValidationError


def _nutrition(base: float) -> Nutrition:
    return Nutrition(
        energy=base * 100,
        protein=base,
        fat=base / 2,
        fat_saturated=base / 4,
        carbs=base * 3,
        carbs_sugars=base,
        fibre=base / 5,
        sodium=base * 10,
    )


def test_add_is_commutative() -> None:
    a = _nutrition(1.5)
    b = _nutrition(4.0)

    assert add(a, b) == add(b, a)


def test_add_is_associative() -> None:
    a = _nutrition(1.0)
    b = _nutrition(2.0)
    c = _nutrition(4.0)

    left = add(add(a, b), c)
    right = add(a, add(b, c))

    for name in NUTRIENT_FIELDS:
        assert getattr(left, name) == pytest.approx(getattr(right, name))


def test_zero_is_identity() -> None:
    a = _nutrition(3.0)

    assert a + Nutrition.zero() == a
    assert sum_nutrition([]) == Nutrition.zero()


def test_scale() -> None:
    a = _nutrition(2.0)

    assert a.scale(1) == a
    assert a.scale(0) == Nutrition.zero()
    assert a.scale(1.5).energy == pytest.approx(300.0)
    assert a.scale(1.5).sodium == pytest.approx(30.0)


def test_add_rejects_other_types() -> None:
    with pytest.raises(TypeError):
        _nutrition(1.0) + 1  # type: ignore[operator]


def test_as_dict_lists_every_nutrient() -> None:
    data = _nutrition(1.0).as_dict()

    assert tuple(data) == NUTRIENT_FIELDS
    assert data["energy"] == 100.0


def test_sum_nutrition() -> None:
    total = sum_nutrition([_nutrition(1.0), _nutrition(2.0), _nutrition(3.0)])

    assert total.protein == pytest.approx(6.0)
    assert total.energy == pytest.approx(600.0)


@pytest.mark.parametrize(
    ("token", "expected"),
    [("g", ServingUnit.GRAMS), ("ml", ServingUnit.MILLILITERS)],
)
def test_serving_unit_parse(token: str, expected: ServingUnit) -> None:
    unit = ServingUnit.parse(token)

    assert unit is expected
    assert unit.symbol == token


@pytest.mark.parametrize("token", ["", "G", "kg", "oz", " g"])
def test_serving_unit_parse_rejects_unknown(token: str) -> None:
    with pytest.raises(ValidationError, match="Invalid value for serving unit"):
        ServingUnit.parse(token)
