"""SQLite connection manager and migration runner."""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

_SCHEMA_PATH = Path(__file__).parent.parent / "db" / "schema.sql"


def get_connection(db_path: str) -> sqlite3.Connection:
    """Return a SQLite connection with WAL mode and foreign keys enabled."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_database(db_path: str) -> None:
    """Run the schema SQL to create all tables, then apply any pending migrations."""
    conn = get_connection(db_path)
    schema_sql = _SCHEMA_PATH.read_text()
    conn.executescript(schema_sql)
    conn.close()

    from adslot.db.migrations import run_migrations
    run_migrations(db_path)


def get_schema_version(db_path: str) -> Optional[int]:
    """Return the current schema version, or None if DB doesn't exist."""
    path = Path(db_path)
    if not path.exists():
        return None
    conn = get_connection(db_path)
    try:
        row = conn.execute(
            "SELECT MAX(version) as v FROM schema_version"
        ).fetchone()
        return row["v"] if row else None
    except sqlite3.OperationalError:
        return None
    finally:
        conn.close()


# (setting_key, setting_value)
DEFAULT_SETTINGS = [
    ("site_title", "adslot"),
    ("ads_enabled", "1"),
    ("max_ads_per_position", "3"),
]


def seed_settings(db_path: str) -> int:
    """Insert default site settings. Returns count of newly inserted."""
    conn = get_connection(db_path)
    inserted = 0
    for key, value in DEFAULT_SETTINGS:
        try:
            conn.execute(
                "INSERT INTO site_settings (setting_key, setting_value) VALUES (?, ?)",
                (key, value),
            )
            inserted += 1
        except sqlite3.IntegrityError:
            pass  # already exists
    conn.commit()
    conn.close()
    return inserted
