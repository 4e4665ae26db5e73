"""
SQLite persistence for users and contacts.

``get_connection`` opens a connection to the configured database file,
``get_cursor`` wraps a connection in a commit-and-close context manager
and ``init_db`` creates the schema on application start.  Schema
scripts are versioned: applied versions are recorded in the
``migrations`` table and only newer scripts run.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings
from .errors import InternalError

logger = logging.getLogger(__name__)

# SQLite INTEGER columns are signed 64-bit.
MAX_ROW_ID = 2**63 - 1

# Faults the driver raises for a request it cannot store: its own errors,
# integers too large to bind, and strings that cannot be encoded as UTF-8
# (UnicodeEncodeError is a ValueError).
STORE_FAULTS = (sqlite3.Error, OverflowError, ValueError)


# Millisecond precision keeps creation order stable for contacts added
# within the same second.
_NOW_SQL = "(strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))"

SCHEMA: list[tuple[int, str]] = [
    (
        1,
        f"""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            date TEXT NOT NULL DEFAULT {_NOW_SQL}
        );

        CREATE TABLE IF NOT EXISTS contacts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            email TEXT,
            phone TEXT,
            type TEXT NOT NULL DEFAULT 'personal',
            date TEXT NOT NULL DEFAULT {_NOW_SQL},
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        );

        CREATE INDEX IF NOT EXISTS idx_contacts_user_date ON contacts(user_id, date);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute paths in ``settings.database_url`` are used as is; relative
    paths are resolved against the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    Foreign key enforcement is per connection in SQLite and is switched
    on here.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Create the database file if needed and apply pending schema scripts."""
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in SCHEMA:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version


def is_row_id(value: int) -> bool:
    """Whether ``value`` fits an SQLite ``INTEGER PRIMARY KEY``."""
    return -MAX_ROW_ID - 1 <= value <= MAX_ROW_ID


@contextmanager
def store_cursor(operation: str) -> Iterator[sqlite3.Cursor]:
    """``get_cursor`` for request handling code.

    Driver faults are logged with their message and re-raised as
    ``InternalError``.  ``ApiError`` raised inside the block passes
    through unchanged.
    """
    try:
        with get_cursor() as cursor:
            yield cursor
    except STORE_FAULTS as exc:
        logger.error(
            "Store operation %s failed: %s: %s", operation, type(exc).__name__, exc
        )
        raise InternalError() from exc
