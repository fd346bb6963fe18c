"""Schema migration runner for the adslot database."""

from __future__ import annotations

import sqlite3

from adslot.core.database import get_connection

# Migrations keyed by target version number.
# Each migration runs SQL to advance from (version - 1) to version.
MIGRATIONS: dict[int, str] = {
    2: """
-- v2: Site settings key/value table
CREATE TABLE IF NOT EXISTS site_settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    setting_key TEXT NOT NULL UNIQUE,
    setting_value TEXT DEFAULT '',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

INSERT OR IGNORE INTO schema_version (version) VALUES (2);
""",
    3: """
-- v3: Index for the active-ads lookup by position and date window
CREATE INDEX IF NOT EXISTS idx_ads_active_window ON ads(position, is_active, start_date, end_date);

INSERT OR IGNORE INTO schema_version (version) VALUES (3);
""",
}


def get_current_version(conn: sqlite3.Connection) -> int:
    """Return the current schema version from the database."""
    try:
        row = conn.execute("SELECT MAX(version) as v FROM schema_version").fetchone()
        return row["v"] if row and row["v"] else 0
    except sqlite3.OperationalError:
        return 0


def run_migrations(db_path: str) -> list[int]:
    """Run all pending migrations. Returns list of versions applied."""
    conn = get_connection(db_path)
    current = get_current_version(conn)
    applied: list[int] = []

    for version in sorted(MIGRATIONS.keys()):
        if version > current:
            conn.executescript(MIGRATIONS[version])
            applied.append(version)

    conn.close()
    return applied
