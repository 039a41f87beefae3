"""Database module for dashboard settings storage."""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from nautilus.storage import TextStore

from .models import AppSettingsData

logger = logging.getLogger(__name__)

APP_SETTINGS_KEY = "app"

DEFAULT_LOGO_SVG = (
    '<path d="M12 16L19.36 10.27C21.5 8.58 21.5 5.42 19.36 3.73C17.22 2.04 13.78 2.04 '
    "11.64 3.73L4.27 9.46C3.16 10.33 3.16 12.67 4.27 13.54L11.64 19.27C13.78 20.96 "
    '17.22 20.96 19.36 19.27C21.5 17.58 21.5 14.42 19.36 12.73L12 7"></path>'
)

DEFAULT_APP_SETTINGS: AppSettingsData = {
    "product_name": "Nautilus",
    "logo_url": None,
    "logo_svg_code": DEFAULT_LOGO_SVG,
    "primary_color": "#0ea5e9",
    "accent_color": "#6366f1",
}


class SettingsDatabase(TextStore):
    """SQLite-backed key/value settings storage."""

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize the database."""
        if db_path is None:
            db_path = Path.home() / ".nautilus" / "settings.db"
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: sqlite3.Connection | None = None
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False  # FastAPI runs sync work in a threadpool
            )
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_db(self) -> None:
        """Create the settings table if it does not exist."""
        conn = self._get_conn()
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS settings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                key TEXT NOT NULL UNIQUE,
                value TEXT,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def get(self, key: str) -> str | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row is not None else None

    def set(self, key: str, value: str) -> None:
        conn = self._get_conn()
        conn.execute(
            """
            INSERT INTO settings (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value, datetime.now(timezone.utc).isoformat()),
        )
        conn.commit()

    def delete(self, key: str) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM settings WHERE key = ?", (key,))
        conn.commit()

    def keys(self) -> list[str]:
        """List stored keys, oldest first."""
        conn = self._get_conn()
        rows = conn.execute("SELECT key FROM settings ORDER BY id").fetchall()
        return [row["key"] for row in rows]

    def get_app_settings(self) -> AppSettingsData:
        """Get application settings merged over the defaults."""
        settings: AppSettingsData = dict(DEFAULT_APP_SETTINGS)  # type: ignore[assignment]
        raw = self.get(APP_SETTINGS_KEY)
        if raw is None:
            return settings

        try:
            stored: dict[str, Any] = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Ignoring malformed app settings: %s", e)
            return settings
        if not isinstance(stored, dict):
            logger.warning("Ignoring app settings: expected an object")
            return settings

        for field_name in DEFAULT_APP_SETTINGS:
            value = stored.get(field_name)
            # Empty values keep the default, except the optional logo URL
            if value or field_name == "logo_url":
                settings[field_name] = value  # type: ignore[literal-required]
        return settings

    def save_app_settings(self, settings: dict[str, Any]) -> AppSettingsData:
        """Merge and store application settings."""
        current = self.get_app_settings()
        current.update(  # type: ignore[typeddict-item]
            {key: value for key, value in settings.items() if key in DEFAULT_APP_SETTINGS}
        )
        self.set(APP_SETTINGS_KEY, json.dumps(current))
        return self.get_app_settings()

    def clear(self) -> None:
        """Clear all settings (for testing)."""
        conn = self._get_conn()
        conn.execute("DELETE FROM settings")
        conn.commit()

