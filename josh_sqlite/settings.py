from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    # Storage
    default_data_dir: str
    sqlite_timeout: float

    # Debug
    debug_log_sql: bool


def get_settings(env_file: str | None = None) -> Settings:
    if env_file:
        load_dotenv(env_file)

    default_data_dir = os.getenv("JOSH_DATA_DIR", "data").strip() or "data"

    # Seconds sqlite3 waits on a locked database before raising.
    sqlite_timeout = _env_float("JOSH_SQLITE_TIMEOUT", 5.0)

    debug_log_sql = _env_bool("JOSH_DEBUG_LOG_SQL", False)

    return Settings(
        default_data_dir=default_data_dir,
        sqlite_timeout=sqlite_timeout,
        debug_log_sql=debug_log_sql,
    )
