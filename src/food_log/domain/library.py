"""Domain models for the food library."""

from dataclasses import dataclass
from datetime import datetime

from food_log.domain.nutrition import Nutrition, ServingUnit
from food_log.errors import ValidationError

# Largest value SQLite stores in an INTEGER column.
MAX_ID = 2**63 - 1


@dataclass(frozen=True)
class FoodInput:
    """Fields supplied when creating or fully editing a food."""

    name: str
    brand: str
    serving_unit: ServingUnit
    nutrition: Nutrition


@dataclass(frozen=True)
class Food:
    """A food in the library, with nutrition per 100 base units."""

    id: int
    name: str
    brand: str
    serving_unit: ServingUnit
    nutrition: Nutrition
    created_at: datetime


@dataclass(frozen=True)
class FoodListItem:
    """Summary row for the library listing."""

    id: int
    name: str
    brand: str


@dataclass(frozen=True)
class ServingSize:
    """A named alternate unit for one food, e.g. `cup = 240 ml`."""

    id: int
    food_id: int
    name: str
    amount: float
    created_at: datetime


def parse_id(value: str) -> int:
    """Parse a user-entered food, serving or entry id."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValidationError(f"invalid id: {value!r}") from exc
    if not 1 <= parsed <= MAX_ID:
        raise ValidationError(f"invalid id: {value!r}")
    return parsed
