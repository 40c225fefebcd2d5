"""SQLite database handle shared by the repositories."""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from food_log.errors import IntegrityError, StorageFault, ValidationError

MEMORY_PATH = ":memory:"

_logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS foods (
    food_id INTEGER PRIMARY KEY,
    name TEXT NOT NULL CHECK (length(name) > 0),
    brand TEXT NOT NULL DEFAULT '',
    -- One of `g` or `ml`. Nutrients are per 100 of this unit.
    serving_unit TEXT NOT NULL CHECK (serving_unit IN ('g', 'ml')),
    energy REAL NOT NULL,
    protein REAL NOT NULL,
    fat REAL NOT NULL,
    fat_saturated REAL NOT NULL,
    carbs REAL NOT NULL,
    carbs_sugars REAL NOT NULL,
    fibre REAL NOT NULL,
    sodium REAL NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_foods_name ON foods(name);

CREATE TABLE IF NOT EXISTS serving_sizes (
    serving_id INTEGER PRIMARY KEY,
    food_id INTEGER NOT NULL REFERENCES foods(food_id) ON DELETE CASCADE,
    serving_name TEXT NOT NULL,
    -- Amount in the food's serving unit.
    serving_amount REAL NOT NULL CHECK (serving_amount > 0),
    created_at TEXT NOT NULL,
    UNIQUE (food_id, serving_name)
);

CREATE TABLE IF NOT EXISTS entries (
    entry_id INTEGER PRIMARY KEY,
    date TEXT NOT NULL,
    food_id INTEGER NOT NULL REFERENCES foods(food_id) ON DELETE CASCADE,
    -- No foreign key: deleting a serving leaves the reference in place.
    serving_id INTEGER,
    amount REAL NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_entries_date ON entries(date, created_at);
"""


class SqliteDatabase:
    """Owns the connection, the schema and the lock around both.

    Every public repository operation runs inside `transaction()`, which
    holds the lock for the whole transaction.
    """

    def __init__(
        self, path: str | Path = MEMORY_PATH, lock_timeout_seconds: float = 5.0
    ) -> None:
        self.path = str(path)
        self.lock_timeout_seconds = lock_timeout_seconds
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = _connect(self.path)
        self._ensure_schema()

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            for statement in _split_statements(_SCHEMA):
                conn.execute(statement)
        _logger.info("Database ready: path=%s", self.path)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Hold the lock and run the block as a single transaction."""
        if not self._lock.acquire(timeout=self.lock_timeout_seconds):
            raise StorageFault("Failed to acquire lock on the database.")
        try:
            conn = self._conn
            if conn is None:
                raise StorageFault("Database is closed.")
            conn.execute("BEGIN")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        except sqlite3.IntegrityError as exc:
            raise IntegrityError(f"Constraint violated: {exc}") from exc
        except sqlite3.Error as exc:
            raise StorageFault(f"sqlite: {exc}") from exc
        except OverflowError as exc:
            raise ValidationError(f"Value out of range for storage: {exc}") from exc
        finally:
            self._lock.release()

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None


def _connect(path: str) -> sqlite3.Connection:
    if path != MEMORY_PATH:
        db_path = Path(path).expanduser()
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFault(f"Failed to create {db_path.parent}: {exc}") from exc
        path = str(db_path)
    try:
        # Transactions are managed explicitly, and FastAPI calls sync endpoints
        # from a thread pool.
        conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        if path != MEMORY_PATH:
            conn.execute("PRAGMA journal_mode=WAL")
    except sqlite3.Error as exc:
        raise StorageFault(f"Failed to open database at {path}: {exc}") from exc
    return conn


def _split_statements(script: str) -> list[str]:
    lines = [line for line in script.splitlines() if not line.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def to_db_timestamp(value: datetime) -> str:
    """Serialize a timestamp as UTC so that text order matches time order.

    Naive timestamps are taken to be UTC already.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC).isoformat()
    return value.astimezone(UTC).isoformat()
