from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import NotFoundError


@dataclass(frozen=True)
class Lookup:
    """Result of a single-key read: either found with a value, or absent."""

    key: str
    found: bool
    value: Any = None

    @classmethod
    def hit(cls, key: str, value: Any) -> "Lookup":
        return cls(key=key, found=True, value=value)

    @classmethod
    def miss(cls, key: str) -> "Lookup":
        return cls(key=key, found=False)

    def unwrap(self) -> Any:
        if not self.found:
            raise NotFoundError(self.key)
        return self.value

    def value_or(self, default: Any = None) -> Any:
        return self.value if self.found else default
