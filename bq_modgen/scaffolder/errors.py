"""Exceptions raised while generating a module.

Every error that should end a generation with a user-visible message derives
from ``ScaffoldError``; ``ModuleGenerator.handle`` turns it into a failed
``CommandOutcome``.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for generation failures."""


class TemplateNotFoundError(ScaffoldError):
    """Raised when a source key has no blob in the template store."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Template not found: {key}")


class TransformError(ScaffoldError):
    """Raised when a processor cannot transform a template."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to process {path}: {reason}")


class SaveError(ScaffoldError):
    """Raised when a template cannot be written to disk."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to write {path}: {reason}")


class PomParseError(ScaffoldError):
    """Raised when a POM cannot be parsed into name components."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to parse {path}: {reason}")
