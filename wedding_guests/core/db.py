"""
SQLite storage for the development backend.

Provides ``get_connection`` for request handlers and services, and
``init_db`` which applies pending migrations and seeds the admin
account on application start.  Applied migration versions are kept in
the ``migrations`` table and new migrations execute in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: accounts allowed to log in to the admin UI
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            disabled INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: the guest list
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS convidados (
            convidado_id INTEGER PRIMARY KEY AUTOINCREMENT,
            nome TEXT NOT NULL,
            presenca TEXT NOT NULL DEFAULT 'nao_confirmado',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute paths in ``settings.database_url`` are used as is; relative
    ones resolve against the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with dict-like rows."""
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Create the database if needed and apply pending migrations.

    When ``settings.admin_password`` is set and no account exists for
    ``settings.admin_email``, the admin account is created.
    """
    with get_cursor() as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        cursor.execute("SELECT MAX(version) AS version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %d", version)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version

        if settings.admin_password:
            from .security import hash_password

            existing = cursor.execute(
                "SELECT id FROM users WHERE email = ?", (settings.admin_email,)
            ).fetchone()
            if not existing:
                cursor.execute(
                    "INSERT INTO users (email, password) VALUES (?, ?)",
                    (settings.admin_email, hash_password(settings.admin_password)),
                )
                logger.info("Seeded admin account %s", settings.admin_email)
