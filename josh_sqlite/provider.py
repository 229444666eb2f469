from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence, TypeVar

from .codec import Key, check_key
from .interfaces import AsyncKeyValueProvider
from .lookup import Lookup
from .names import GLOBAL_TABLE_NAMES, TableNameRegistry, sanitize_table_name
from .options import ProviderOptions
from .paths import resolve_data_dir, store_path
from .settings import Settings, get_settings
from .state import ProviderState, ReadinessGate
from .table import SqliteKeyValueTable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncSqliteProvider(AsyncKeyValueProvider):
    """
    Async provider over a single SQLite key-value table.

    Construction validates options and resolves paths without touching the
    database; `init()` opens the store and creates the table. Operations
    issued before `init()` completes wait for it. Blocking sqlite3 calls run
    through asyncio.to_thread.
    """

    def __init__(
        self,
        options: ProviderOptions | Mapping[str, Any] | None = None,
        *,
        settings: Settings | None = None,
        registry: TableNameRegistry | None = None,
        **overrides: Any,
    ) -> None:
        self._options = ProviderOptions.parse(options, **overrides)
        self._settings = settings or get_settings()
        self._registry = registry or GLOBAL_TABLE_NAMES

        self.name = sanitize_table_name(self._options.name)
        self.db_name = self._options.db_name
        self.data_dir = resolve_data_dir(self._options.data_dir, self._settings.default_data_dir)

        self._table = SqliteKeyValueTable(
            store_path(self.data_dir),
            self.name,
            timeout=self._settings.sqlite_timeout,
            log_sql=self._settings.debug_log_sql,
        )
        self._gate = ReadinessGate()
        self._claimed = False
        self._opening: asyncio.Future[bool] | None = None

    @property
    def options(self) -> ProviderOptions:
        return self._options

    @property
    def store_path(self) -> Path:
        return self._table.path

    @property
    def state(self) -> ProviderState:
        return self._gate.state

    async def __aenter__(self) -> "AsyncSqliteProvider":
        await self.init()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def init(self) -> None:
        self._gate.begin()
        try:
            self._registry.claim(self.store_path, self.name, self._options.name)
            self._claimed = True
            self._opening = asyncio.ensure_future(asyncio.to_thread(self._table.open))
            created = await asyncio.shield(self._opening)
        except BaseException as exc:
            self._release_name()
            self._gate.mark_failed(exc)
            raise
        logger.debug("provider %s ready (created=%s)", self.name, created)
        self._gate.mark_ready()

    async def wait_ready(self) -> None:
        await self._gate.wait_ready()

    async def _run(self, fn: Callable[..., T], *args: Any) -> T:
        await self._gate.wait_ready()
        return await asyncio.to_thread(fn, *args)

    async def get(self, key_or_keys: Key | Sequence[Key]) -> Lookup | list[tuple[str, Any]]:
        """
        Fetch one key (returns a Lookup) or a list/tuple of keys (returns the
        (key, value) pairs that exist). Keys come back in their stored string form.
        """
        if isinstance(key_or_keys, (list, tuple)):
            for k in key_or_keys:
                check_key(k)
            if not key_or_keys:
                await self._gate.wait_ready()
                return []
            return await self._run(self._table.get_many, list(key_or_keys))
        check_key(key_or_keys)
        return await self._run(self._table.get, key_or_keys)

    async def fetch(self, key: Key) -> Any:
        check_key(key)
        lookup = await self._run(self._table.get, key)
        return lookup.unwrap()

    async def has(self, key: Key) -> bool:
        check_key(key)
        return await self._run(self._table.has, key)

    async def set(self, key: Key, value: Any) -> None:
        check_key(key)
        await self._run(self._table.set, key, value)

    async def delete(self, key: Key) -> None:
        check_key(key)
        await self._run(self._table.delete, key)

    async def clear(self) -> None:
        await self._run(self._table.clear)

    async def count(self) -> int:
        return await self._run(self._table.count)

    async def keys(self) -> list[str]:
        return await self._run(self._table.keys)

    def key_check(self, key: Any) -> None:
        check_key(key)

    async def close(self) -> None:
        if self._gate.state is ProviderState.INITIALIZING:
            await self._gate.wait_settled()
        if self._opening is not None and not self._opening.done():
            # A cancelled init leaves the worker thread still opening the store.
            await asyncio.wait({self._opening})
        if self._gate.state is not ProviderState.FAILED:
            self._gate.mark_closed()
        try:
            if self._table.is_open:
                await asyncio.to_thread(self._table.close)
        finally:
            self._release_name()

    def _release_name(self) -> None:
        if self._claimed:
            self._registry.release(self.store_path, self.name)
            self._claimed = False
