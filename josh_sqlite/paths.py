from __future__ import annotations

from pathlib import Path

STORE_FILENAME = "josh.sqlite"


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_data_dir(data_dir: str | Path | None, default: str | Path = "data") -> Path:
    """
    Resolve the store directory against the current working directory.

    Only the default directory is created; an explicit one must already exist.
    """
    if data_dir is None:
        return ensure_dir(Path.cwd() / default)
    return Path.cwd() / Path(data_dir)


def store_path(data_dir: Path) -> Path:
    return data_dir / STORE_FILENAME
