from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Sequence

from .codec import Key, coerce_key, decode_value, encode_value
from .errors import StoreClosedError
from .interfaces import KeyValueTable
from .lookup import Lookup
from .names import quote_identifier

logger = logging.getLogger(__name__)

# Stays under SQLITE_MAX_VARIABLE_NUMBER on old builds (999).
BATCH_CHUNK_SIZE = 500


class SqliteKeyValueTable(KeyValueTable):
    """
    One `key TEXT PRIMARY KEY, value TEXT` table inside a SQLite store file.

    - The connection runs in autocommit mode: every call is its own unit of work.
    - Values are stored as JSON text and decoded on read.
    - Blocking; the async provider runs these calls in worker threads.
    """

    def __init__(self, path: Path, table: str, *, timeout: float = 5.0, log_sql: bool = False):
        self._path = path
        self._table = table
        self._ident = quote_identifier(table)
        self._timeout = timeout
        self._log_sql = log_sql
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def table(self) -> str:
        return self._table

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _db(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError()
        return self._conn

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        if self._log_sql:
            logger.debug("sql table=%s: %s params=%r", self._table, sql, params)
        return self._db().execute(sql, params)

    def open(self) -> bool:
        conn = sqlite3.connect(
            str(self._path),
            timeout=self._timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        self._conn = conn
        logger.debug("opened store %s for table %s", self._path, self._table)
        try:
            return self._ensure_table()
        except BaseException:
            self._conn = None
            conn.close()
            raise

    def _ensure_table(self) -> bool:
        row = self._execute(
            "SELECT count(*) FROM sqlite_master WHERE type='table' AND name = ?",
            (self._table,),
        ).fetchone()
        if row[0]:
            return False
        self._execute(f"CREATE TABLE {self._ident} (key text PRIMARY KEY, value text)")
        # Only applied on creation; an existing table keeps whatever the file has.
        self._execute("PRAGMA synchronous = 1")
        self._execute("PRAGMA journal_mode = wal")
        logger.info("created table %s in %s", self._table, self._path)
        return True

    def get(self, key: Key) -> Lookup:
        k = coerce_key(key)
        row = self._execute(f"SELECT value FROM {self._ident} WHERE key = ?", (k,)).fetchone()
        if row is None:
            return Lookup.miss(k)
        return Lookup.hit(k, decode_value(row[0]))

    def get_many(self, keys: Sequence[Key]) -> list[tuple[str, Any]]:
        wanted = [coerce_key(k) for k in keys]
        out: list[tuple[str, Any]] = []
        for start in range(0, len(wanted), BATCH_CHUNK_SIZE):
            chunk = wanted[start : start + BATCH_CHUNK_SIZE]
            placeholders = ", ".join("?" for _ in chunk)
            rows = self._execute(
                f"SELECT key, value FROM {self._ident} WHERE key IN ({placeholders})",
                chunk,
            ).fetchall()
            out.extend((k, decode_value(v)) for k, v in rows)
        return out

    def has(self, key: Key) -> bool:
        k = coerce_key(key)
        row = self._execute(f"SELECT 1 FROM {self._ident} WHERE key = ?", (k,)).fetchone()
        return row is not None

    def set(self, key: Key, value: Any) -> None:
        k = coerce_key(key)
        payload = encode_value(value)
        self._execute(
            f"INSERT OR REPLACE INTO {self._ident} (key, value) VALUES (?, ?)",
            (k, payload),
        )

    def delete(self, key: Key) -> None:
        self._execute(f"DELETE FROM {self._ident} WHERE key = ?", (coerce_key(key),))

    def clear(self) -> None:
        self._execute(f"DELETE FROM {self._ident}")

    def count(self) -> int:
        row = self._execute(f"SELECT count(*) FROM {self._ident}").fetchone()
        return int(row[0])

    def keys(self) -> list[str]:
        return [row[0] for row in self._execute(f"SELECT key FROM {self._ident}").fetchall()]

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        conn.close()
        logger.debug("closed store %s for table %s", self._path, self._table)
