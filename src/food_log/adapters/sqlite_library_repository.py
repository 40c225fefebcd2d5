"""SQLite repository for foods and serving sizes."""

import math
import sqlite3
from dataclasses import dataclass
from datetime import datetime

from food_log.adapters.sqlite_database import SqliteDatabase, to_db_timestamp
from food_log.domain.library import Food, FoodInput, FoodListItem, ServingSize
from food_log.domain.nutrition import Nutrition, ServingUnit
from food_log.errors import IntegrityError, NotFoundError, ValidationError
from food_log.services.library import LibraryRepository

_FOOD_COLUMNS = (
    "food_id, name, brand, serving_unit, energy, protein, fat, fat_saturated, "
    "carbs, carbs_sugars, fibre, sodium, created_at"
)
_SERVING_COLUMNS = "serving_id, food_id, serving_name, serving_amount, created_at"


@dataclass
class SqliteLibraryRepository(LibraryRepository):
    """SQLite implementation of the food library."""

    database: SqliteDatabase

    def create_food(self, payload: FoodInput, created_at: datetime) -> int:
        """Insert a food and return its id."""
        _validate_food(payload)
        nutrition = payload.nutrition
        with self.database.transaction() as conn:
            cur = conn.execute(
                """INSERT INTO foods
                   (name, brand, serving_unit, energy, protein, fat, fat_saturated,
                    carbs, carbs_sugars, fibre, sodium, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    payload.name,
                    payload.brand,
                    payload.serving_unit.value,
                    nutrition.energy,
                    nutrition.protein,
                    nutrition.fat,
                    nutrition.fat_saturated,
                    nutrition.carbs,
                    nutrition.carbs_sugars,
                    nutrition.fibre,
                    nutrition.sodium,
                    to_db_timestamp(created_at),
                ),
            )
            return int(cur.lastrowid)

    def get_food(self, food_id: int) -> Food:
        """Return a food by id."""
        with self.database.transaction() as conn:
            row = conn.execute(
                f"SELECT {_FOOD_COLUMNS} FROM foods WHERE food_id = ?", (food_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Food {food_id} not found.")
        return _parse_food(row)

    def list_foods(self) -> list[FoodListItem]:
        """Return every food ordered by name."""
        with self.database.transaction() as conn:
            rows = conn.execute(
                "SELECT food_id, name, brand FROM foods ORDER BY name, food_id"
            ).fetchall()
        return [
            FoodListItem(id=row["food_id"], name=row["name"], brand=row["brand"])
            for row in rows
        ]

    def edit_food(self, food_id: int, payload: FoodInput) -> None:
        """Overwrite every mutable field of a food."""
        _validate_food(payload)
        nutrition = payload.nutrition
        with self.database.transaction() as conn:
            cur = conn.execute(
                """UPDATE foods
                   SET name = ?, brand = ?, serving_unit = ?, energy = ?,
                       protein = ?, fat = ?, fat_saturated = ?, carbs = ?,
                       carbs_sugars = ?, fibre = ?, sodium = ?
                   WHERE food_id = ?""",
                (
                    payload.name,
                    payload.brand,
                    payload.serving_unit.value,
                    nutrition.energy,
                    nutrition.protein,
                    nutrition.fat,
                    nutrition.fat_saturated,
                    nutrition.carbs,
                    nutrition.carbs_sugars,
                    nutrition.fibre,
                    nutrition.sodium,
                    food_id,
                ),
            )
            if cur.rowcount == 0:
                raise NotFoundError(f"Food {food_id} not found.")

    def count_foods(self) -> int:
        """Return the number of foods in the library."""
        with self.database.transaction() as conn:
            row = conn.execute("SELECT count(*) AS total FROM foods").fetchone()
        return int(row["total"])

    def create_serving(
        self, food_id: int, name: str, amount: float, created_at: datetime
    ) -> int:
        """Insert a serving size for a food and return its id."""
        if not name.strip():
            raise ValidationError("Serving name must not be empty.")
        if not math.isfinite(amount) or amount <= 0:
            raise ValidationError("Serving amount must be greater than zero.")
        with self.database.transaction() as conn:
            if not _food_exists(conn, food_id):
                raise NotFoundError(f"Food {food_id} not found.")
            duplicate = conn.execute(
                "SELECT 1 FROM serving_sizes WHERE food_id = ? AND serving_name = ?",
                (food_id, name),
            ).fetchone()
            if duplicate is not None:
                raise IntegrityError(
                    f"Food {food_id} already has a serving named {name!r}."
                )
            cur = conn.execute(
                """INSERT INTO serving_sizes
                   (food_id, serving_name, serving_amount, created_at)
                   VALUES (?, ?, ?, ?)""",
                (food_id, name, amount, to_db_timestamp(created_at)),
            )
            return int(cur.lastrowid)

    def delete_serving(self, serving_id: int) -> None:
        """Delete a serving size; missing ids are ignored."""
        with self.database.transaction() as conn:
            conn.execute(
                "DELETE FROM serving_sizes WHERE serving_id = ?", (serving_id,)
            )

    def get_serving(self, serving_id: int) -> ServingSize | None:
        """Return a serving size by id, if present."""
        with self.database.transaction() as conn:
            row = conn.execute(
                f"SELECT {_SERVING_COLUMNS} FROM serving_sizes WHERE serving_id = ?",
                (serving_id,),
            ).fetchone()
        if row is None:
            return None
        return _parse_serving(row)

    def list_servings(self, food_id: int) -> list[ServingSize]:
        """Return the serving sizes of a food ordered by name."""
        with self.database.transaction() as conn:
            rows = conn.execute(
                f"""SELECT {_SERVING_COLUMNS} FROM serving_sizes
                    WHERE food_id = ?
                    ORDER BY serving_name, serving_id""",
                (food_id,),
            ).fetchall()
        return [_parse_serving(row) for row in rows]


def _food_exists(conn: sqlite3.Connection, food_id: int) -> bool:
    row = conn.execute("SELECT 1 FROM foods WHERE food_id = ?", (food_id,)).fetchone()
    return row is not None


def _validate_food(payload: FoodInput) -> None:
    if not payload.name.strip():
        raise ValidationError("Food name must not be empty.")
    for name, value in payload.nutrition.as_dict().items():
        if not math.isfinite(value) or value < 0:
            raise ValidationError(f"Nutrient {name} must be a non-negative number.")


def _parse_food(row: sqlite3.Row) -> Food:
    """Parse a food row into a domain model."""
    return Food(
        id=row["food_id"],
        name=row["name"],
        brand=row["brand"],
        serving_unit=ServingUnit.parse(row["serving_unit"]),
        nutrition=Nutrition(
            energy=float(row["energy"]),
            protein=float(row["protein"]),
            fat=float(row["fat"]),
            fat_saturated=float(row["fat_saturated"]),
            carbs=float(row["carbs"]),
            carbs_sugars=float(row["carbs_sugars"]),
            fibre=float(row["fibre"]),
            sodium=float(row["sodium"]),
        ),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _parse_serving(row: sqlite3.Row) -> ServingSize:
    return ServingSize(
        id=row["serving_id"],
        food_id=row["food_id"],
        name=row["serving_name"],
        amount=float(row["serving_amount"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
