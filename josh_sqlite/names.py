from __future__ import annotations

import re
import threading
from pathlib import Path

from .errors import ConfigurationError, NameCollisionError

_UNSAFE = re.compile(r"[^a-zA-Z0-9]")


def sanitize_table_name(name: str) -> str:
    """
    Coerce a caller-supplied name into a table identifier.

    Every character outside [a-zA-Z0-9] becomes "_", then the result is
    lower-cased. The mapping is lossy: "My Map!" and "my-map?" both give
    "my_map_".
    """
    if not isinstance(name, str) or not name:
        raise ConfigurationError("Must provide options.name")
    return _UNSAFE.sub("_", name).lower()


def quote_identifier(table: str) -> str:
    # Sanitized names only hold [a-z0-9_]; quoting keeps names like "123" valid.
    return f'"{table}"'


class TableNameRegistry:
    """
    Tracks which caller name owns each sanitized table name, per store file.

    Several providers may hold the same caller name; a different caller name
    that aliases to a held table is rejected.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._claims: dict[tuple[str, str], tuple[str, int]] = {}

    def claim(self, store: Path, table: str, requested: str) -> None:
        key = (str(store.resolve()), table)
        with self._guard:
            held = self._claims.get(key)
            if held is None:
                self._claims[key] = (requested, 1)
                return
            owner, refs = held
            if owner != requested:
                raise NameCollisionError(table, requested, owner)
            self._claims[key] = (owner, refs + 1)

    def release(self, store: Path, table: str) -> None:
        key = (str(store.resolve()), table)
        with self._guard:
            held = self._claims.get(key)
            if held is None:
                return
            owner, refs = held
            if refs <= 1:
                del self._claims[key]
            else:
                self._claims[key] = (owner, refs - 1)

    def owner_of(self, store: Path, table: str) -> str | None:
        with self._guard:
            held = self._claims.get((str(store.resolve()), table))
            return held[0] if held else None


GLOBAL_TABLE_NAMES = TableNameRegistry()
