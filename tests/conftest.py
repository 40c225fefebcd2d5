"""Shared test fixtures."""

from collections.abc import Iterator
from datetime import date

import pytest

from food_log.adapters.sqlite_database import SqliteDatabase
from food_log.adapters.sqlite_entry_repository import SqliteEntryRepository
from food_log.adapters.sqlite_library_repository import SqliteLibraryRepository
from food_log.config import Settings
from food_log.containers import AppContainer
from food_log.domain.library import FoodInput
from food_log.domain.nutrition import Nutrition, ServingUnit
from food_log.services.library import LibraryService
from food_log.services.log import LogService
from food_log.services.summary import DaySummaryService

LOG_DAY = date(2025, 1, 6)


def make_food_input(
    name: str = "Oats",
    brand: str = "",
    serving_unit: ServingUnit = ServingUnit.GRAMS,
    energy: float = 200.0,
    **nutrients: float,
) -> FoodInput:
    """Build a food input with zeroed nutrients unless given."""
    values = {
        "protein": 0.0,
        "fat": 0.0,
        "fat_saturated": 0.0,
        "carbs": 0.0,
        "carbs_sugars": 0.0,
        "fibre": 0.0,
        "sodium": 0.0,
    }
    values.update(nutrients)
    return FoodInput(
        name=name,
        brand=brand,
        serving_unit=serving_unit,
        nutrition=Nutrition(energy=energy, **values),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(db_path=":memory:", lock_timeout_seconds=0.05)


@pytest.fixture
def database(settings: Settings) -> Iterator[SqliteDatabase]:
    db = SqliteDatabase(
        settings.db_path, lock_timeout_seconds=settings.lock_timeout_seconds
    )
    yield db
    db.close()


@pytest.fixture
def library_repository(database: SqliteDatabase) -> SqliteLibraryRepository:
    return SqliteLibraryRepository(database)


@pytest.fixture
def entry_repository(database: SqliteDatabase) -> SqliteEntryRepository:
    return SqliteEntryRepository(database)


@pytest.fixture
def container(
    settings: Settings,
    database: SqliteDatabase,
    library_repository: SqliteLibraryRepository,
    entry_repository: SqliteEntryRepository,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        database=database,
        library_service=LibraryService(library_repository),
        log_service=LogService(entry_repository),
        summary_service=DaySummaryService(
            library=library_repository, entries=entry_repository
        ),
        close_resources=close_resources,
    )
