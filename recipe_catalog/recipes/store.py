from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import Any

from ..errors import StoreUnavailableError
from ..filters.engine import ComposedQuery
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)


class RecipeStore:
    """Read-only access to the sqlite recipe table."""

    def __init__(self, config: StoreConfig = DEFAULT_STORE_CONFIG) -> None:
        self.db_path = Path(config.db_path)

    def _connect(self) -> sqlite3.Connection:
        # Read-only URI: a missing file is an error rather than a new empty database.
        uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
        conn = sqlite3.connect(uri, uri=True)
        conn.row_factory = sqlite3.Row
        return conn

    def execute(self, query: ComposedQuery) -> list[dict[str, Any]]:
        """Run a composed query and return every row as a plain dict."""
        try:
            with closing(self._connect()) as conn:
                rows = conn.execute(query.sql, query.args).fetchall()
        except sqlite3.Error as exc:
            logger.warning("Recipe store query failed", exc_info=True)
            raise StoreUnavailableError(f"Recipe store unavailable: {exc}") from exc
        return [dict(row) for row in rows]

    def fetch_one(self, query: ComposedQuery) -> dict[str, Any] | None:
        rows = self.execute(query)
        return rows[0] if rows else None


_store: RecipeStore | None = None


def get_store() -> RecipeStore:
    """Return the process-wide store, creating it on first call."""
    global _store
    if _store is None:
        _store = RecipeStore()
    return _store
