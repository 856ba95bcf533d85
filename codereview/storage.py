"""
Single-slot storage for the latest successful review.

Only one entry is kept; every successful submission overwrites it.
"""

import json
import logging
import sqlite3
from typing import Optional, Protocol

from codereview.constants import DEFAULT_STORE_PATH, LATEST_REVIEW_KEY
from codereview.models import StoredReview


class ReviewStore(Protocol):
    def get(self) -> Optional[StoredReview]: ...

    def set(self, entry: StoredReview) -> None: ...

    def clear(self) -> None: ...


class InMemoryReviewStore:
    """Process-local store. Nothing survives a restart."""

    def __init__(self):
        self._entry: Optional[StoredReview] = None

    def get(self) -> Optional[StoredReview]:
        return self._entry

    def set(self, entry: StoredReview) -> None:
        self._entry = entry

    def clear(self) -> None:
        self._entry = None


class SqliteReviewStore:
    """File-backed store holding the entry as JSON under a single named key."""

    def __init__(self, path: str = DEFAULT_STORE_PATH, key: str = LATEST_REVIEW_KEY):
        self.path = path
        self.key = key
        self.init_db()

    def _connect(self):
        return sqlite3.connect(self.path)

    def init_db(self):
        try:
            conn = self._connect()
            conn.execute("""
                CREATE TABLE IF NOT EXISTS saved_reviews (
                    name TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.commit()
            conn.close()
        except sqlite3.Error as e:
            logging.error(f"Failed to initialize review store at {self.path}: {e}")

    def get(self) -> Optional[StoredReview]:
        try:
            conn = self._connect()
            row = conn.execute(
                "SELECT payload FROM saved_reviews WHERE name = ?", (self.key,)
            ).fetchone()
            conn.close()
        except sqlite3.Error as e:
            logging.error(f"Failed to read {self.key}: {e}")
            return None

        if not row:
            return None

        try:
            return StoredReview.model_validate(json.loads(row[0]))
        except ValueError as e:
            logging.error(f"Stored {self.key} is corrupted, ignoring it: {e}")
            return None

    def set(self, entry: StoredReview) -> None:
        try:
            conn = self._connect()
            conn.execute("""
                INSERT OR REPLACE INTO saved_reviews (name, payload, timestamp)
                VALUES (?, ?, CURRENT_TIMESTAMP)
            """, (self.key, entry.model_dump_json()))
            conn.commit()
            conn.close()
        except sqlite3.Error as e:
            logging.error(f"Failed to save {self.key}: {e}")

    def clear(self) -> None:
        try:
            conn = self._connect()
            conn.execute("DELETE FROM saved_reviews WHERE name = ?", (self.key,))
            conn.commit()
            conn.close()
        except sqlite3.Error as e:
            logging.error(f"Failed to clear {self.key}: {e}")


def create_store(kind: str, path: str = DEFAULT_STORE_PATH) -> ReviewStore:
    """Build the store named by the REVIEW_STORE setting."""
    if kind == "sqlite":
        return SqliteReviewStore(path)
    if kind != "memory":
        logging.warning(f"Unknown review store '{kind}', using memory")
    return InMemoryReviewStore()
