"""In-memory representation of a single template flowing through a pipeline."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Union

Content = Union[str, bytes, None]


@dataclass(frozen=True)
class TemplateHandle:
    """One template: where it came from, where it goes, and what it holds.

    Handles are immutable.  Processors return a new handle via
    :meth:`with_path` / :meth:`with_content` instead of mutating the one they
    receive, so a failing processor can never leave a half-updated handle
    behind.

    Attributes:
        source_key: Logical key the loader resolved (template-store key or a
            filesystem path for the parent descriptor).
        output_path: Absolute path the saver will write to.
        content: Text for text templates, bytes for binary ones, ``None``
            for directory-only templates.
        binary: Whether *content* must be preserved byte for byte.
    """

    source_key: str
    output_path: Path
    content: Content = None
    binary: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "output_path", Path(self.output_path))
        if self.binary and isinstance(self.content, str):
            raise TypeError(f"Binary template '{self.source_key}' cannot hold text content")
        if not self.binary and isinstance(self.content, bytes):
            raise TypeError(f"Text template '{self.source_key}' cannot hold bytes content")

    def with_path(self, output_path: Path | str) -> "TemplateHandle":
        return dataclasses.replace(self, output_path=Path(output_path))

    def with_content(self, content: Content) -> "TemplateHandle":
        return dataclasses.replace(self, content=content)
