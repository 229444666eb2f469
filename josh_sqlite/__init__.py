from __future__ import annotations

from .codec import check_key, coerce_key, decode_value, encode_value
from .errors import (
    ConfigurationError,
    JoshSqliteError,
    NameCollisionError,
    NotFoundError,
    ProviderStateError,
    SerializationError,
    StorageEngineError,
    StoreClosedError,
    StoreFailedError,
    TypeMismatchError,
)
from .interfaces import AsyncKeyValueProvider, KeyValueTable
from .lookup import Lookup
from .names import sanitize_table_name
from .options import ProviderOptions
from .provider import AsyncSqliteProvider
from .settings import Settings, get_settings
from .state import ProviderState
from .table import SqliteKeyValueTable

__all__ = [
    "AsyncKeyValueProvider",
    "AsyncSqliteProvider",
    "KeyValueTable",
    "SqliteKeyValueTable",
    "Lookup",
    "ProviderOptions",
    "ProviderState",
    "Settings",
    "get_settings",
    "sanitize_table_name",
    "check_key",
    "coerce_key",
    "encode_value",
    "decode_value",
    "JoshSqliteError",
    "ConfigurationError",
    "NameCollisionError",
    "TypeMismatchError",
    "SerializationError",
    "NotFoundError",
    "ProviderStateError",
    "StoreClosedError",
    "StoreFailedError",
    "StorageEngineError",
]
