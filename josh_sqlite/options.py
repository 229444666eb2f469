from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError


class ProviderOptions(BaseModel):
    """
    Construction parameters:
      { "name": "<table name>", "dataDir": "./data", "dbName": "defaultenmap" }

    `db_name` is kept for compatibility and does not change the store file.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    name: str
    data_dir: Path | None = Field(default=None, alias="dataDir")
    db_name: str = Field(default="defaultenmap", alias="dbName")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator("data_dir", mode="before")
    @classmethod
    def _empty_data_dir_is_default(cls, v: Any) -> Any:
        # "" falls back to the default directory rather than the cwd.
        if v == "":
            return None
        return v

    @classmethod
    def parse(cls, options: "ProviderOptions | Mapping[str, Any] | None" = None, **overrides: Any) -> "ProviderOptions":
        if isinstance(options, ProviderOptions) and not overrides:
            return options
        raw: dict[str, Any] = {}
        if isinstance(options, ProviderOptions):
            raw.update(options.model_dump(exclude_none=True))
        elif options is not None:
            raw.update(options)
        raw.update(overrides)
        if not raw.get("name"):
            raise ConfigurationError("Must provide options.name")
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"invalid provider options: {exc}") from exc
