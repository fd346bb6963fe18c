"""CRUD operations for the adslot database tables."""

from __future__ import annotations

import sqlite3
from typing import Optional

from adslot.core.database import get_connection

_AD_COLUMNS = (
    "title", "content", "image_url", "link_url", "position",
    "is_active", "start_date", "end_date",
)


class Repository:
    """Central data-access layer for the adslot database."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    def _conn(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    # ---- Ads ----

    def create_ad(
        self, title: str, position: str, content: str = "",
        image_url: Optional[str] = None, link_url: Optional[str] = None,
        is_active: bool = True, start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> int:
        conn = self._conn()
        cur = conn.execute(
            """INSERT INTO ads
               (title, content, image_url, link_url, position, is_active, start_date, end_date)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
            (title, content, image_url, link_url, position, int(is_active), start_date, end_date),
        )
        conn.commit()
        row_id = cur.lastrowid
        conn.close()
        return row_id

    def get_ad(self, ad_id: int) -> Optional[dict]:
        conn = self._conn()
        row = conn.execute("SELECT * FROM ads WHERE id = ?", (ad_id,)).fetchone()
        conn.close()
        return dict(row) if row else None

    def get_ads(self, position: Optional[str] = None, limit: int = 100) -> list[dict]:
        conn = self._conn()
        if position:
            rows = conn.execute(
                "SELECT * FROM ads WHERE position = ? ORDER BY created_at DESC, id DESC LIMIT ?",
                (position, limit),
            ).fetchall()
        else:
            rows = conn.execute(
                "SELECT * FROM ads ORDER BY created_at DESC, id DESC LIMIT ?", (limit,)
            ).fetchall()
        conn.close()
        return [dict(r) for r in rows]

    def update_ad(self, ad_id: int, **kwargs) -> None:
        fields = {k: v for k, v in kwargs.items() if k in _AD_COLUMNS}
        if not fields:
            return
        if "is_active" in fields:
            fields["is_active"] = int(bool(fields["is_active"]))
        sets = ", ".join(f"{k} = ?" for k in fields)
        vals = list(fields.values()) + [ad_id]
        conn = self._conn()
        conn.execute(
            f"UPDATE ads SET {sets}, updated_at = CURRENT_TIMESTAMP WHERE id = ?", vals
        )
        conn.commit()
        conn.close()

    def delete_ad(self, ad_id: int) -> None:
        conn = self._conn()
        conn.execute("DELETE FROM ads WHERE id = ?", (ad_id,))
        conn.commit()
        conn.close()

    def get_active_ads(self, position: str, today: str) -> list[dict]:
        """Active ads for a position whose date window contains ``today`` (ISO date)."""
        conn = self._conn()
        rows = conn.execute(
            """SELECT * FROM ads
               WHERE position = ?
               AND is_active = 1
               AND (start_date IS NULL OR start_date <= ?)
               AND (end_date IS NULL OR end_date >= ?)
               ORDER BY created_at DESC, id DESC""",
            (position, today, today),
        ).fetchall()
        conn.close()
        return [dict(r) for r in rows]

    def increment_click_count(self, ad_id: int) -> Optional[int]:
        """Atomically bump the click counter. Returns the new count."""
        conn = self._conn()
        cur = conn.execute(
            """UPDATE ads SET click_count = click_count + 1,
               updated_at = CURRENT_TIMESTAMP WHERE id = ?""",
            (ad_id,),
        )
        if cur.rowcount == 0:
            conn.close()
            return None
        row = conn.execute("SELECT click_count FROM ads WHERE id = ?", (ad_id,)).fetchone()
        conn.commit()
        conn.close()
        return row["click_count"] if row else None

    def get_ad_counts_by_position(self) -> dict[str, int]:
        conn = self._conn()
        rows = conn.execute(
            "SELECT position, COUNT(*) as n FROM ads GROUP BY position"
        ).fetchall()
        conn.close()
        return {r["position"]: r["n"] for r in rows}

    # ---- Site settings ----

    def get_setting(self, key: str, default: str = "") -> str:
        conn = self._conn()
        row = conn.execute(
            "SELECT setting_value FROM site_settings WHERE setting_key = ?", (key,)
        ).fetchone()
        conn.close()
        return row["setting_value"] if row else default

    def set_setting(self, key: str, value: str) -> None:
        conn = self._conn()
        exists = conn.execute(
            "SELECT id FROM site_settings WHERE setting_key = ?", (key,)
        ).fetchone()
        if exists:
            conn.execute(
                """UPDATE site_settings SET setting_value = ?, updated_at = CURRENT_TIMESTAMP
                   WHERE setting_key = ?""",
                (value, key),
            )
        else:
            conn.execute(
                "INSERT INTO site_settings (setting_key, setting_value) VALUES (?, ?)",
                (key, value),
            )
        conn.commit()
        conn.close()

    def get_settings(self) -> list[dict]:
        conn = self._conn()
        rows = conn.execute(
            "SELECT * FROM site_settings ORDER BY setting_key"
        ).fetchall()
        conn.close()
        return [dict(r) for r in rows]

    # ---- Stats ----

    def get_table_counts(self) -> dict[str, int]:
        conn = self._conn()
        counts = {}
        for table in ("ads", "site_settings"):
            try:
                row = conn.execute(f"SELECT COUNT(*) as n FROM {table}").fetchone()
                counts[table] = row["n"]
            except sqlite3.OperationalError:
                counts[table] = 0
        conn.close()
        return counts
