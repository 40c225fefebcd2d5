"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from food_log.adapters.sqlite_database import SqliteDatabase
from food_log.adapters.sqlite_entry_repository import SqliteEntryRepository
from food_log.adapters.sqlite_library_repository import SqliteLibraryRepository
from food_log.config import Settings
from food_log.services.library import LibraryService
from food_log.services.log import LogService
from food_log.services.summary import DaySummaryService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    database: SqliteDatabase
    library_service: LibraryService
    log_service: LogService
    summary_service: DaySummaryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    database = SqliteDatabase(
        resolved_settings.db_path,
        lock_timeout_seconds=resolved_settings.lock_timeout_seconds,
    )
    library_repository = SqliteLibraryRepository(database)
    entry_repository = SqliteEntryRepository(database)

    async def close_resources() -> None:
        database.close()

    return AppContainer(
        settings=resolved_settings,
        database=database,
        library_service=LibraryService(library_repository),
        log_service=LogService(entry_repository),
        summary_service=DaySummaryService(
            library=library_repository, entries=entry_repository
        ),
        close_resources=close_resources,
    )
