"""bq-modgen configuration.

Typed configuration for the module generator. Settings use a Pydantic v2
model so they are validated at construction time and can be loaded
from JSON or read from environment variables without boiler-plate.

The generator itself never reads ``Config`` directly: it asks a
``ConfigService`` for string values by key, which keeps the generator
independent of where the values come from.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


DEFAULT_BQ_VERSION = "3.0.2"
DEFAULT_JAVA_VERSION = "11"


class Config(BaseModel):
    """Global bq-modgen configuration.

    Holds the version strings that end up in generated build files and
    sources.  Instances are typically created once by the CLI entry point
    and wrapped in a ``ConfigService``.
    """

    bq_version: str = Field(
        default=DEFAULT_BQ_VERSION, description="Bootique version used by generated modules"
    )
    java_version: str = Field(
        default=DEFAULT_JAVA_VERSION, description="Java release targeted by generated modules"
    )

    @field_validator("bq_version", "java_version")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("version must not be blank")
        return value

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from a JSON file."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, base: "Config | None" = None) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            BQ_MODGEN_BQ_VERSION, BQ_MODGEN_JAVA_VERSION.

        Args:
            base: Values to start from; environment variables override them.
        """
        values: dict[str, Any] = base.model_dump() if base is not None else {}
        if os.environ.get("BQ_MODGEN_BQ_VERSION"):
            values["bq_version"] = os.environ["BQ_MODGEN_BQ_VERSION"]
        if os.environ.get("BQ_MODGEN_JAVA_VERSION"):
            values["java_version"] = os.environ["BQ_MODGEN_JAVA_VERSION"]
        return cls(**values)


class ConfigService:
    """Key/value view over ``Config`` used by the generators."""

    BQ_VERSION = "BQ_VERSION"
    JAVA_VERSION = "JAVA_VERSION"

    _FIELDS: dict[str, str] = {
        BQ_VERSION: "bq_version",
        JAVA_VERSION: "java_version",
    }

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    def get(self, key: str) -> str:
        """Return the configured value for *key*.

        Raises:
            KeyError: If *key* is not a known setting.
        """
        try:
            field_name = self._FIELDS[key]
        except KeyError:
            raise KeyError(f"Unknown configuration key: {key}") from None
        return getattr(self.config, field_name)
