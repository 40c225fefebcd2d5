"""Nutrition domain models."""

from collections.abc import Iterable
from dataclasses import dataclass, fields
from enum import Enum

from food_log.errors import ValidationError


class ServingUnit(Enum):
    """Base unit in which a food's nutrition facts are expressed."""

    GRAMS = "g"
    MILLILITERS = "ml"

    @classmethod
    def parse(cls, value: str) -> "ServingUnit":
        """Parse a unit token, accepting only `g` and `ml`."""
        for unit in cls:
            if unit.value == value:
                return unit
        raise ValidationError(f"Invalid value for serving unit: {value!r}.")

    @property
    def symbol(self) -> str:
        """Return the short display symbol."""
        return self.value


@dataclass(frozen=True)
class Nutrition:
    """Nutritional content of some amount of food.

    Energy is in kcal, sodium in mg, every other field in grams.
    """

    energy: float
    protein: float
    fat: float
    fat_saturated: float
    carbs: float
    carbs_sugars: float
    fibre: float
    sodium: float

    @classmethod
    def zero(cls) -> "Nutrition":
        """Return the additive identity."""
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    def scale(self, factor: float) -> "Nutrition":
        """Multiply every nutrient by a factor."""
        return Nutrition(
            energy=self.energy * factor,
            protein=self.protein * factor,
            fat=self.fat * factor,
            fat_saturated=self.fat_saturated * factor,
            carbs=self.carbs * factor,
            carbs_sugars=self.carbs_sugars * factor,
            fibre=self.fibre * factor,
            sodium=self.sodium * factor,
        )

    def __add__(self, other: "Nutrition") -> "Nutrition":
        if not isinstance(other, Nutrition):
            return NotImplemented
        return Nutrition(
            energy=self.energy + other.energy,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            fat_saturated=self.fat_saturated + other.fat_saturated,
            carbs=self.carbs + other.carbs,
            carbs_sugars=self.carbs_sugars + other.carbs_sugars,
            fibre=self.fibre + other.fibre,
            sodium=self.sodium + other.sodium,
        )

    def as_dict(self) -> dict[str, float]:
        """Return the nutrients keyed by field name."""
        return {field.name: getattr(self, field.name) for field in fields(self)}


NUTRIENT_FIELDS = tuple(field.name for field in fields(Nutrition))


def add(a: Nutrition, b: Nutrition) -> Nutrition:
    """Return the pointwise sum of two nutrition values."""
    return a + b


def sum_nutrition(values: Iterable[Nutrition]) -> Nutrition:
    """Sum nutrition values, starting from zero."""
    total = Nutrition.zero()
    for value in values:
        total = total + value
    return total
