from __future__ import annotations

import json
import math
from typing import Any

from pydantic import BaseModel

from .errors import SerializationError, TypeMismatchError

Key = str | int | float

# Integral floats below this print as plain digits; larger ones keep exponent form.
_PLAIN_FLOAT_LIMIT = 1e21


def check_key(key: Any) -> None:
    """
    Keys are a closed set of primitive kinds: str, int or finite float.

    bool is rejected even though it subclasses int.
    """
    if key is None or isinstance(key, bool) or not isinstance(key, (str, int, float)):
        raise TypeMismatchError(
            f"SQLite keys must be strings or numbers, got {type(key).__name__}"
        )
    if isinstance(key, float) and not math.isfinite(key):
        raise TypeMismatchError(f"SQLite keys must be finite numbers, got {key!r}")


def coerce_key(key: Any) -> str:
    """
    Validate a key and return the string form it is stored under.

    Integral floats are stored like the matching int: 1.0 -> "1", 1e16 -> "10000000000000000".
    """
    check_key(key)
    if isinstance(key, str):
        return key
    if isinstance(key, float) and key.is_integer() and abs(key) < _PLAIN_FLOAT_LIMIT:
        return str(int(key))
    return str(key)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_value(value: Any) -> str:
    """
    Encode a value as UTF-8 JSON text.

    NaN/Infinity are rejected so the stored text stays valid JSON.
    """
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False, default=_json_default)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"value is not JSON serializable: {exc}") from exc


def decode_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"stored value is not valid JSON: {exc}") from exc
