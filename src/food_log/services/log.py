"""Daily log service."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol

from food_log.domain.log import Entry, EntryInput

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for log entries."""

    def create_entry(self, payload: EntryInput, created_at: datetime) -> int:
        """Create an entry and return its id."""

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry if it exists."""

    def list_entries(self, day: date) -> list[Entry]:
        """Return the entries of a date, oldest first."""


@dataclass
class LogService:
    """Service for logging and removing consumed foods."""

    repository: EntryRepository

    def log_food(
        self, day: date, food_id: int, serving_id: int | None, amount: float
    ) -> int:
        """Log an amount of a food, optionally in one of its serving sizes."""
        payload = EntryInput(
            day=day, food_id=food_id, serving_id=serving_id, amount=amount
        )
        entry_id = self.repository.create_entry(
            payload, created_at=datetime.now(tz=UTC)
        )
        _logger.info(
            "Logged entry: entry_id=%s day=%s food_id=%s serving_id=%s amount=%s",
            entry_id,
            day,
            food_id,
            serving_id,
            amount,
        )
        return entry_id

    def delete_entry(self, entry_id: int) -> None:
        """Remove an entry from the log."""
        self.repository.delete_entry(entry_id)
        _logger.info("Deleted entry: entry_id=%s", entry_id)

    def list_entries(self, day: date) -> list[Entry]:
        """Return the entries logged for a date."""
        return self.repository.list_entries(day)
