"""Maven-style coordinates of the module being generated."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bq_modgen.utils import module_name_from_artifact_name, sanitize_name

DEFAULT_VERSION = "1.0-SNAPSHOT"

_GROUP_RE = re.compile(r"^[A-Za-z_]\w*(\.[A-Za-z_]\w*)*$")


class NameComponents(BaseModel):
    """Group, artifact name and version of a module.

    ``namespace`` doubles as the Java package of generated sources, and
    ``module_name`` is the title-cased artifact name used as a class-name
    prefix (``my-demo`` -> ``MyDemo``).  ``name`` is also the module
    directory, so it is restricted to a single safe path segment.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(..., min_length=1, description="Dotted group id / Java package")
    name: str = Field(..., min_length=1, description="Artifact id, also the module directory")
    version: str = Field(default=DEFAULT_VERSION, min_length=1)

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, value: str) -> str:
        if not _GROUP_RE.match(value):
            raise ValueError(f"Invalid group '{value}', expected a dotted Java package")
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if sanitize_name(value) != value or value.startswith("."):
            raise ValueError(
                f"Invalid module name '{value}', use lower case letters, digits, '-', '_' or '.'"
            )
        return value

    @property
    def java_package(self) -> str:
        return self.namespace

    @property
    def module_name(self) -> str:
        return module_name_from_artifact_name(self.name)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}:{self.version}"

    @classmethod
    def parse(cls, value: str) -> "NameComponents":
        """Parse ``group:name[:version]`` as typed on the command line.

        Raises:
            ValueError: If the value is malformed.
        """
        parts = [p.strip() for p in value.split(":")]
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(
                f"Invalid module coordinates '{value}', expected group:name[:version]"
            )
        version = parts[2] if len(parts) == 3 else DEFAULT_VERSION
        try:
            return cls(namespace=parts[0], name=parts[1], version=version)
        except ValidationError as exc:
            message = exc.errors()[0]["msg"]
            raise ValueError(message.removeprefix("Value error, ")) from None
