"""Pydantic models for API request payloads."""

from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field

from food_log.domain.library import MAX_ID, FoodInput, parse_id
from food_log.domain.log import parse_amount
from food_log.domain.nutrition import Nutrition, ServingUnit

# Path parameter for food, serving and entry ids.
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]


class FoodPayload(BaseModel):
    """Full food record, used for both create and edit."""

    name: str = Field(min_length=1)
    brand: str = ""
    serving_unit: str
    energy: float = Field(ge=0)
    protein: float = Field(ge=0)
    fat: float = Field(ge=0)
    fat_saturated: float = Field(ge=0)
    carbs: float = Field(ge=0)
    carbs_sugars: float = Field(ge=0)
    fibre: float = Field(ge=0)
    sodium: float = Field(ge=0)

    def to_input(self) -> FoodInput:
        """Convert to the domain input, validating the unit token."""
        return FoodInput(
            name=self.name,
            brand=self.brand,
            serving_unit=ServingUnit.parse(self.serving_unit),
            nutrition=Nutrition(
                energy=self.energy,
                protein=self.protein,
                fat=self.fat,
                fat_saturated=self.fat_saturated,
                carbs=self.carbs,
                carbs_sugars=self.carbs_sugars,
                fibre=self.fibre,
                sodium=self.sodium,
            ),
        )


class ServingPayload(BaseModel):
    """New serving size for a food."""

    name: str = Field(min_length=1)
    amount: float = Field(gt=0)


class EntryPayload(BaseModel):
    """New log entry."""

    food_id: int = Field(ge=1, le=MAX_ID)
    serving_id: int | None = Field(default=None, ge=1, le=MAX_ID)
    amount: float = Field(ge=0)


class FoodForm(BaseModel):
    """HTML form fields for creating or editing a food.

    Numbers arrive as text and are parsed by `to_input` so that bad values
    surface as `ValidationError`.
    """

    name: str
    brand: str = ""
    serving_unit: str
    energy: str
    protein: str
    fat: str
    fat_saturated: str
    carbs: str
    carbs_sugars: str
    fibre: str
    sodium: str

    def to_input(self) -> FoodInput:
        return FoodInput(
            name=self.name.strip(),
            brand=self.brand.strip(),
            serving_unit=ServingUnit.parse(self.serving_unit),
            nutrition=Nutrition(
                energy=parse_amount(self.energy),
                protein=parse_amount(self.protein),
                fat=parse_amount(self.fat),
                fat_saturated=parse_amount(self.fat_saturated),
                carbs=parse_amount(self.carbs),
                carbs_sugars=parse_amount(self.carbs_sugars),
                fibre=parse_amount(self.fibre),
                sodium=parse_amount(self.sodium),
            ),
        )


class ServingForm(BaseModel):
    """HTML form fields for a new serving size."""

    serving_name: str
    serving_amount: str


class EntryForm(BaseModel):
    """HTML form fields for logging a food."""

    food_id: str
    serving_id: str = ""
    amount: str

    def parsed_serving_id(self) -> int | None:
        """Return the serving id, or None for the base unit."""
        if not self.serving_id.strip():
            return None
        return parse_id(self.serving_id)
