"""SQLite gazetteer backend.

Terms live in a single ``terms(term TEXT PRIMARY KEY, bits INTEGER)``
table. Each calling thread opens its own connection, so one backend can
serve a batch parse running on a thread pool.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable
from pathlib import Path

from citeparse.gazetteer.base import (
    Category,
    GazetteerError,
    check_category,
    normalize_term,
    split_bits,
)

logger = logging.getLogger(__name__)

_SCHEMA = "CREATE TABLE IF NOT EXISTS terms (term TEXT PRIMARY KEY, bits INTEGER NOT NULL)"
_UPSERT = (
    "INSERT INTO terms (term, bits) VALUES (?, ?) "
    "ON CONFLICT(term) DO UPDATE SET bits = bits | excluded.bits"
)


class SqliteGazetteer:
    """Gazetteer stored in an SQLite database file.

    Parameters
    ----------
    path : Path
        Database file; created with its table when missing.
    timeout : float
        Seconds a connection waits on a locked database.

    Raises
    ------
    GazetteerError
        If the database cannot be opened or initialized.
    """

    def __init__(self, path: Path, timeout: float = 20.0) -> None:
        self.path = Path(path)
        self.timeout = timeout
        self._local = threading.local()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._connection() as conn:
                conn.execute(_SCHEMA)
        except (OSError, sqlite3.Error) as e:
            raise GazetteerError(f"Cannot open gazetteer database {self.path}: {e}") from e

    def _connection(self) -> sqlite3.Connection:
        conn = getattr(self._local, "conn", None)
        if conn is None:
            conn = sqlite3.connect(str(self.path), timeout=self.timeout)
            self._local.conn = conn
        return conn

    def close(self) -> None:
        """Close the calling thread's connection."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None

    def lookup(self, term: str) -> frozenset[Category]:
        """Categories of *term*; database errors are logged and read as no match."""
        key = normalize_term(term)
        if not key:
            return frozenset()
        try:
            row = self._connection().execute(
                "SELECT bits FROM terms WHERE term = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            logger.warning("Gazetteer lookup failed for %r in %s: %s", term, self.path, e)
            return frozenset()
        return split_bits(row[0]) if row else frozenset()

    def import_terms(self, category: Category, terms: Iterable[str]) -> int:
        bit = check_category(category).bit
        return self.import_entries((term, bit) for term in terms)

    def import_entries(self, entries: Iterable[tuple[str, int]]) -> int:
        """Upsert ``(term, bitmask)`` pairs, OR-ing bits into existing terms.

        Raises
        ------
        GazetteerError
            If a bitmask is invalid or the write fails.
        """
        rows = []
        for term, bits in entries:
            Category.from_bits(bits)
            key = normalize_term(term)
            if key:
                rows.append((key, bits))
        try:
            with self._connection() as conn:
                conn.executemany(_UPSERT, rows)
        except sqlite3.Error as e:
            raise GazetteerError(f"Gazetteer import into {self.path} failed: {e}") from e
        return len(rows)
