"""Domain models for the daily food log."""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from food_log.domain.library import Food
from food_log.domain.nutrition import Nutrition
from food_log.errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass(frozen=True)
class EntryInput:
    """Fields supplied when logging a food."""

    day: date
    food_id: int
    serving_id: int | None
    amount: float


@dataclass(frozen=True)
class Entry:
    """A logged consumption event."""

    id: int
    day: date
    food_id: int
    serving_id: int | None
    amount: float
    created_at: datetime


@dataclass(frozen=True)
class EntryLine:
    """An entry resolved against its food, with scaled nutrition."""

    entry: Entry
    food: Food
    unit_label: str
    multiplier: float
    factor: float
    nutrition: Nutrition
    serving_missing: bool = False


@dataclass(frozen=True)
class DaySummary:
    """All resolved entries for a date and their total."""

    day: date
    lines: list[EntryLine]
    total: Nutrition

    @property
    def previous_day(self) -> date | None:
        """The day before, or None on the first representable date."""
        if self.day == date.min:
            return None
        return self.day - timedelta(days=1)

    @property
    def next_day(self) -> date | None:
        """The day after, or None on the last representable date."""
        if self.day == date.max:
            return None
        return self.day + timedelta(days=1)


def parse_log_date(value: str) -> date:
    """Parse a zero-padded `YYYY-MM-DD` string."""
    if not _DATE_PATTERN.fullmatch(value):
        raise ValidationError(f"invalid date: {value}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError(f"invalid date: {value}") from exc


def format_log_date(value: date) -> str:
    """Format a date as `YYYY-MM-DD`."""
    return value.isoformat()


def humanize_date(value: date) -> str:
    """Format a date for headings, e.g. `Monday, 06 January 2025`."""
    return value.strftime("%A, %d %B %Y")


def parse_amount(value: str) -> float:
    """Parse a user-entered numeric amount."""
    try:
        amount = float(value.strip())
    except ValueError as exc:
        raise ValidationError(f"invalid amount: {value!r}") from exc
    if not math.isfinite(amount):
        raise ValidationError(f"invalid amount: {value!r}")
    return amount
