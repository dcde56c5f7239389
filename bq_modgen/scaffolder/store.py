"""Read-only template storage.

Templates are addressed by string keys such as
``templates/maven-module/pom.xml``.  The bundled templates live next to this
module, so the default store resolves keys against the ``scaffolder``
package directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from .errors import TemplateNotFoundError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_STORE_ROOT = Path(__file__).parent


@runtime_checkable
class TemplateStore(Protocol):
    """Keyed blob source."""

    def read(self, key: str) -> bytes:
        """Return the blob stored under *key*.

        Raises:
            TemplateNotFoundError: If no blob exists for *key*.
        """
        ...


class PackageTemplateStore:
    """Template store backed by a directory on disk.

    Keys are POSIX-style paths relative to *root*.  Keys that would escape
    the root (absolute paths, ``..`` segments) are treated as missing.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root is not None else _DEFAULT_STORE_ROOT

    def read(self, key: str) -> bytes:
        path = self._resolve(key)
        if path is None or not path.is_file():
            raise TemplateNotFoundError(key)
        return path.read_bytes()

    def _resolve(self, key: str) -> Path | None:
        relative = Path(key)
        if relative.is_absolute() or ".." in relative.parts:
            return None
        return self.root / relative


class DictTemplateStore:
    """In-memory template store, handy for tests and ad-hoc templates."""

    def __init__(self, blobs: Mapping[str, bytes | str] | None = None) -> None:
        self._blobs: dict[str, bytes] = {}
        for key, blob in (blobs or {}).items():
            self._blobs[key] = blob.encode("utf-8") if isinstance(blob, str) else blob

    def read(self, key: str) -> bytes:
        try:
            return self._blobs[key]
        except KeyError:
            raise TemplateNotFoundError(key) from None
