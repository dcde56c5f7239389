"""Template savers: the only pipeline stage that touches the filesystem."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Protocol

from .errors import SaveError
from .properties import PropertySet
from .template import TemplateHandle


class Saver(Protocol):
    def save(self, template: TemplateHandle, properties: PropertySet) -> Path | None:
        """Write *template* and return its path, or ``None`` if nothing was written."""
        ...


class TextContentSaver:
    """Writes text content as UTF-8, creating parent directories as needed."""

    def save(self, template: TemplateHandle, properties: PropertySet) -> Path:
        path = template.output_path
        content = template.content
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        try:
            _write_file(path, content or "")
        except OSError as exc:
            raise SaveError(path, exc.strerror or str(exc)) from exc
        return path


class SafeBinaryContentSaver:
    """Writes bytes without ever leaving the target half-written.

    * A handle without content leaves an existing file untouched.
    * If the file already holds exactly these bytes nothing is written.
    * Otherwise the bytes go to a temporary file in the same directory which
      then replaces the target.  A symlinked target is followed, so the link
      itself survives.

    Returns ``None`` whenever the file was left as it was.
    """

    def save(self, template: TemplateHandle, properties: PropertySet) -> Path | None:
        path = template.output_path
        content = template.content
        if content is None:
            return None
        if isinstance(content, str):
            content = content.encode("utf-8")
        try:
            if path.is_file() and path.read_bytes() == content:
                return None
            _replace_file(path, content)
        except OSError as exc:
            raise SaveError(path, exc.strerror or str(exc)) from exc
        return path


class DirOnlySaver:
    """Creates the directory at the output path and ignores content."""

    def save(self, template: TemplateHandle, properties: PropertySet) -> Path:
        path = template.output_path
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SaveError(path, exc.strerror or str(exc)) from exc
        return path


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _replace_file(path: Path, content: bytes) -> None:
    """Write *content* next to *path* and atomically move it into place."""
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(content)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
