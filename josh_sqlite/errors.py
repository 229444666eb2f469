from __future__ import annotations

import sqlite3

# Engine failures are never wrapped; callers catch sqlite3.Error directly.
StorageEngineError = sqlite3.Error


class JoshSqliteError(Exception):
    """Base class for errors raised by the provider itself."""


class ConfigurationError(JoshSqliteError, ValueError):
    pass


class NameCollisionError(ConfigurationError):
    def __init__(self, table: str, requested: str, held_by: str):
        super().__init__(
            f"table name {requested!r} sanitizes to {table!r}, already in use by {held_by!r}"
        )
        self.table = table
        self.requested = requested
        self.held_by = held_by


class TypeMismatchError(JoshSqliteError, TypeError):
    pass


class SerializationError(JoshSqliteError, ValueError):
    pass


class NotFoundError(JoshSqliteError, KeyError):
    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"key {self.key!r} not found"


class ProviderStateError(JoshSqliteError, RuntimeError):
    pass


class StoreClosedError(ProviderStateError):
    def __init__(self, message: str = "store is closed"):
        super().__init__(message)


class StoreFailedError(ProviderStateError):
    def __init__(self, message: str = "store failed to initialize"):
        super().__init__(message)
