"""SQLite repository for log entries."""

import math
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime

from food_log.adapters.sqlite_database import SqliteDatabase, to_db_timestamp
from food_log.domain.log import Entry, EntryInput, format_log_date, parse_log_date
from food_log.errors import IntegrityError, NotFoundError, ValidationError
from food_log.services.log import EntryRepository


@dataclass
class SqliteEntryRepository(EntryRepository):
    """SQLite implementation for the daily log."""

    database: SqliteDatabase

    def create_entry(self, payload: EntryInput, created_at: datetime) -> int:
        """Insert an entry and return its id."""
        if not math.isfinite(payload.amount) or payload.amount < 0:
            raise ValidationError("Entry amount must be a non-negative number.")
        with self.database.transaction() as conn:
            food = conn.execute(
                "SELECT 1 FROM foods WHERE food_id = ?", (payload.food_id,)
            ).fetchone()
            if food is None:
                raise NotFoundError(f"Food {payload.food_id} not found.")
            if payload.serving_id is not None:
                serving = conn.execute(
                    "SELECT food_id FROM serving_sizes WHERE serving_id = ?",
                    (payload.serving_id,),
                ).fetchone()
                if serving is None:
                    raise NotFoundError(f"Serving {payload.serving_id} not found.")
                if serving["food_id"] != payload.food_id:
                    raise IntegrityError(
                        f"Serving {payload.serving_id} does not belong to "
                        f"food {payload.food_id}."
                    )
            cur = conn.execute(
                """INSERT INTO entries (date, food_id, serving_id, amount, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    format_log_date(payload.day),
                    payload.food_id,
                    payload.serving_id,
                    payload.amount,
                    to_db_timestamp(created_at),
                ),
            )
            return int(cur.lastrowid)

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry; missing ids are ignored."""
        with self.database.transaction() as conn:
            conn.execute("DELETE FROM entries WHERE entry_id = ?", (entry_id,))

    def list_entries(self, day: date) -> list[Entry]:
        """Return the entries for a date in the order they were logged."""
        with self.database.transaction() as conn:
            rows = conn.execute(
                """SELECT entry_id, date, food_id, serving_id, amount, created_at
                   FROM entries
                   WHERE date = ?
                   ORDER BY created_at, entry_id""",
                (format_log_date(day),),
            ).fetchall()
        return [_parse_entry(row) for row in rows]


def _parse_entry(row: sqlite3.Row) -> Entry:
    return Entry(
        id=row["entry_id"],
        day=parse_log_date(row["date"]),
        food_id=row["food_id"],
        serving_id=row["serving_id"],
        amount=float(row["amount"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
