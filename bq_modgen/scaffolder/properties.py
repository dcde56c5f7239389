"""Immutable property set passed to every template pipeline.

A ``PropertySet`` is assembled once per generation through its ``Builder``
and is read-only afterwards.  Values are strings, booleans or paths; reads
are typed and fall back to a caller-supplied default for unknown keys.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

PropertyValue = Union[str, bool, Path]

_ALLOWED_TYPES = (str, bool, Path)


class PropertySet(Mapping[str, PropertyValue]):
    """Read-only keyed bag of scalar rendering variables."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, PropertyValue] | None = None) -> None:
        data = dict(values or {})
        for key, value in data.items():
            _check_entry(key, value)
        self._values: Mapping[str, PropertyValue] = MappingProxyType(data)

    @classmethod
    def builder(cls) -> "PropertySet.Builder":
        return cls.Builder()

    # -- Mapping protocol ------------------------------------------------

    def __getitem__(self, key: str) -> PropertyValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PropertySet):
            return dict(self._values) == dict(other._values)
        if isinstance(other, Mapping):
            return dict(self._values) == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertySet({dict(self._values)!r})"

    # -- Typed reads -----------------------------------------------------

    def get_string(self, key: str, default: str = "") -> str:
        """Return *key* as a string (paths and booleans are converted)."""
        value = self._values.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return *key* as a boolean.

        Strings ``"true"``/``"false"`` (any case) are accepted; any other
        non-boolean value yields *default*.
        """
        value = self._values.get(key)
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        return default

    def get_path(self, key: str) -> Path | None:
        """Return *key* as a ``Path``, or ``None`` when unset or empty."""
        value = self._values.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            return None
        return Path(value)

    # -- Views -----------------------------------------------------------

    def as_dict(self) -> dict[str, PropertyValue]:
        """Return a mutable copy of the underlying values."""
        return dict(self._values)

    def template_context(self) -> dict[str, Any]:
        """Return a Jinja2-friendly context.

        Dotted keys are not valid template identifiers, so ``java.package``
        is exposed as ``java_package``.  Paths are rendered as strings.
        """
        context: dict[str, Any] = {}
        for key, value in self._values.items():
            context[key.replace(".", "_")] = str(value) if isinstance(value, Path) else value
        return context

    # -- Builder ---------------------------------------------------------

    class Builder:
        """Collects entries for a ``PropertySet``; the last write of a key wins."""

        def __init__(self) -> None:
            self._values: dict[str, PropertyValue] = {}

        def with_(self, key: str, value: PropertyValue) -> "PropertySet.Builder":
            _check_entry(key, value)
            self._values[key] = value
            return self

        def with_all(self, values: Mapping[str, PropertyValue]) -> "PropertySet.Builder":
            for key, value in values.items():
                self.with_(key, value)
            return self

        def build(self) -> "PropertySet":
            return PropertySet(self._values)


def _check_entry(key: str, value: Any) -> None:
    if not isinstance(key, str) or not key:
        raise TypeError(f"Property key must be a non-empty string, got {key!r}")
    if not isinstance(value, _ALLOWED_TYPES):
        raise TypeError(
            f"Property '{key}' must be a str, bool or Path, got {type(value).__name__}"
        )
