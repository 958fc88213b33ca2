"""SQLite database connection and initialization.

One Database object is constructed per process and handed to whoever needs
it (the web app lifespan, the CLI, tests). The connection is opened once and
reused; statement execution is serialized with a lock so the same connection
can be shared across FastAPI worker threads.

DB location: ./data/dedications.db by default (created automatically).
"""

import logging
import sqlite3
import threading
from pathlib import Path
from types import TracebackType
from typing import Any, Iterable

from dedications.storage.models import ALL_SCHEMAS

logger = logging.getLogger(__name__)

# Default database path (relative to CWD)
DEFAULT_DB_PATH = Path("./data") / "dedications.db"


class Database:
    """A single SQLite connection with WAL journaling enabled."""

    def __init__(self, path: Path | str = DEFAULT_DB_PATH) -> None:
        self.path = Path(path)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def __enter__(self) -> "Database":
        self.open()
        self.init_schema()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> None:
        """Open (creating if absent) the database file.

        Safe to call more than once; an already open connection is kept.
        """
        if self._conn is not None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = _connect(self.path)
        logger.info("Opened database at %s", self.path)

    def init_schema(self) -> None:
        """Create all tables.

        Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
        """
        with self._lock:
            conn = self._connection()
            for ddl in ALL_SCHEMAS:
                conn.execute(ddl)
            conn.commit()
        logger.debug("Schema initialized for %s", self.path)

    def close(self) -> None:
        """Close the connection (if any)."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("Closed database at %s", self.path)

    def journal_mode(self) -> str:
        row = self.fetch_one("PRAGMA journal_mode")
        return str(row[0]) if row is not None else ""

    def execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        """Run a single write statement and commit it."""
        with self._lock:
            conn = self._connection()
            cursor = conn.execute(sql, tuple(params))
            conn.commit()
            return cursor

    def fetch_one(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Row | None:
        with self._lock:
            return self._connection().execute(sql, tuple(params)).fetchone()

    def fetch_all(self, sql: str, params: Iterable[Any] = ()) -> list[sqlite3.Row]:
        with self._lock:
            return self._connection().execute(sql, tuple(params)).fetchall()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database is not open. Call open() first.")
        return self._conn


def _connect(path: Path) -> sqlite3.Connection:
    """Create a new SQLite connection with preferred settings."""
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn
