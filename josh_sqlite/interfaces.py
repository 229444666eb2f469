from __future__ import annotations

from typing import Any, Protocol, Sequence

from .codec import Key
from .lookup import Lookup


class KeyValueTable(Protocol):
    """
    Blocking key-value table: one named table of JSON values.
    """

    def open(self) -> bool:
        """Open the store and ensure the table exists. Returns True if it was created."""
        ...

    def get(self, key: Key) -> Lookup: ...
    def get_many(self, keys: Sequence[Key]) -> list[tuple[str, Any]]: ...
    def has(self, key: Key) -> bool: ...
    def set(self, key: Key, value: Any) -> None: ...
    def delete(self, key: Key) -> None: ...
    def clear(self) -> None: ...
    def count(self) -> int: ...
    def keys(self) -> list[str]: ...
    def close(self) -> None: ...


class AsyncKeyValueProvider(Protocol):
    """
    Provider contract consumed by map/cache layers. Every store call is awaitable.
    """

    async def init(self) -> None: ...
    async def wait_ready(self) -> None: ...

    async def get(self, key_or_keys: Key | Sequence[Key]) -> Lookup | list[tuple[str, Any]]: ...
    async def fetch(self, key: Key) -> Any: ...
    async def has(self, key: Key) -> bool: ...
    async def set(self, key: Key, value: Any) -> None: ...
    async def delete(self, key: Key) -> None: ...
    async def clear(self) -> None: ...
    async def count(self) -> int: ...
    async def keys(self) -> list[str]: ...
    async def close(self) -> None: ...
