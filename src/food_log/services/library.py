"""Services for managing the food library."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from food_log.domain.library import Food, FoodInput, FoodListItem, ServingSize

_logger = logging.getLogger(__name__)


class LibraryRepository(Protocol):
    """Persistence interface for foods and their serving sizes."""

    def create_food(self, payload: FoodInput, created_at: datetime) -> int:
        """Create a food and return its id."""

    def get_food(self, food_id: int) -> Food:
        """Return a food by id, raising NotFoundError if absent."""

    def list_foods(self) -> list[FoodListItem]:
        """Return all foods ordered by name."""

    def edit_food(self, food_id: int, payload: FoodInput) -> None:
        """Replace every mutable field of a food."""

    def count_foods(self) -> int:
        """Return the number of foods."""

    def create_serving(
        self, food_id: int, name: str, amount: float, created_at: datetime
    ) -> int:
        """Create a serving size and return its id."""

    def delete_serving(self, serving_id: int) -> None:
        """Delete a serving size if it exists."""

    def get_serving(self, serving_id: int) -> ServingSize | None:
        """Return a serving size by id, if present."""

    def list_servings(self, food_id: int) -> list[ServingSize]:
        """Return the serving sizes of a food ordered by name."""


@dataclass
class LibraryService:
    """Application service for library operations."""

    repository: LibraryRepository

    def create_food(self, payload: FoodInput) -> int:
        """Add a food to the library."""
        food_id = self.repository.create_food(payload, created_at=datetime.now(tz=UTC))
        _logger.info("Created food: food_id=%s name=%s", food_id, payload.name)
        return food_id

    def get_food(self, food_id: int) -> Food:
        """Return a food by id."""
        return self.repository.get_food(food_id)

    def list_foods(self) -> list[FoodListItem]:
        """Return all foods ordered by name."""
        return self.repository.list_foods()

    def edit_food(self, food_id: int, payload: FoodInput) -> Food:
        """Replace a food's fields and return the updated record."""
        self.repository.edit_food(food_id, payload)
        _logger.info("Edited food: food_id=%s", food_id)
        return self.repository.get_food(food_id)

    def count_foods(self) -> int:
        """Return the library size."""
        return self.repository.count_foods()

    def add_serving(self, food_id: int, name: str, amount: float) -> int:
        """Add a named serving size to a food."""
        serving_id = self.repository.create_serving(
            food_id, name, amount, created_at=datetime.now(tz=UTC)
        )
        _logger.info(
            "Created serving: serving_id=%s food_id=%s name=%s amount=%s",
            serving_id,
            food_id,
            name,
            amount,
        )
        return serving_id

    def delete_serving(self, serving_id: int) -> None:
        """Delete a serving size. Entries that use it keep the reference."""
        self.repository.delete_serving(serving_id)
        _logger.info("Deleted serving: serving_id=%s", serving_id)

    def list_servings(self, food_id: int) -> list[ServingSize]:
        """Return the serving sizes of a food."""
        return self.repository.list_servings(food_id)
