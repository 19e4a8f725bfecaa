"""
Persistence of the dark mode preference.
A small SQLite key/value table keeps the preference across sessions.
"""

import logging
import os
import sqlite3

from error_handler import handle_preference_error

logger = logging.getLogger('chart_generator.theme_store')

DARK_MODE_KEY = "darkMode"

CREATE_PREFERENCES_TABLE = """
CREATE TABLE IF NOT EXISTS preferences (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

SELECT_PREFERENCE = "SELECT value FROM preferences WHERE key = ?;"

UPSERT_PREFERENCE = """
INSERT INTO preferences (key, value) VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET value = excluded.value;
"""


class ThemeStore:
    """Stores the dark mode flag as the string "true" or "false"."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._initialized = False

    def _ensure_database(self) -> None:
        if self._initialized:
            return

        db_directory = os.path.dirname(self.db_path)
        if db_directory and not os.path.exists(db_directory):
            os.makedirs(db_directory)
            logger.info("Created preferences directory: %s", db_directory)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute(CREATE_PREFERENCES_TABLE)
        self._initialized = True

    @handle_preference_error(default=None)
    def get_value(self, key: str):
        self._ensure_database()
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(SELECT_PREFERENCE, (key,)).fetchone()
        return row[0] if row else None

    @handle_preference_error(default=False)
    def set_value(self, key: str, value: str) -> bool:
        self._ensure_database()
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(UPSERT_PREFERENCE, (key, value))
            conn.commit()
        return True

    def load(self) -> bool:
        """Saved dark mode preference; anything other than "true" means light mode."""
        return self.get_value(DARK_MODE_KEY) == "true"

    def save(self, dark_mode: bool) -> bool:
        saved = self.set_value(DARK_MODE_KEY, "true" if dark_mode else "false")
        if saved:
            logger.debug("Saved dark mode preference: %s", dark_mode)
        return saved
