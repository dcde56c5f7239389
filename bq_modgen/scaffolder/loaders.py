"""Template loaders: the stage that turns a source key into a handle.

Store-backed loaders resolve ``input.path + key`` in the template store and
place the output at ``output.path / key``.  ``BinaryFileLoader`` instead
reads an arbitrary file from disk and targets the same file, which is how the
parent descriptor enters its pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .errors import ScaffoldError, TemplateNotFoundError
from .properties import PropertySet
from .store import PackageTemplateStore, TemplateStore
from .template import TemplateHandle


class Loader(Protocol):
    def load(self, source: str, properties: PropertySet) -> TemplateHandle: ...


def _output_path(source: str, properties: PropertySet) -> Path:
    root = properties.get_path("output.path")
    if root is None:
        raise ScaffoldError("Property 'output.path' is not set")
    return root / source


class TemplateLoader:
    """Loads UTF-8 text templates from a template store."""

    def __init__(self, store: TemplateStore | None = None) -> None:
        self.store = store or PackageTemplateStore()

    def load(self, source: str, properties: PropertySet) -> TemplateHandle:
        key = properties.get_string("input.path") + source
        blob = self.store.read(key)
        try:
            content = blob.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ScaffoldError(f"Template {key} is not valid UTF-8: {exc}") from exc
        return TemplateHandle(source, _output_path(source, properties), content)


class BinaryTemplateLoader(TemplateLoader):
    """Loads templates from a template store as raw bytes."""

    def load(self, source: str, properties: PropertySet) -> TemplateHandle:
        key = properties.get_string("input.path") + source
        blob = self.store.read(key)
        return TemplateHandle(source, _output_path(source, properties), blob, binary=True)


class BinaryFileLoader:
    """Loads an existing file from disk as raw bytes.

    The source key is a filesystem path and the output path is that same
    path, so the file is rewritten in place.
    """

    def load(self, source: str, properties: PropertySet) -> TemplateHandle:
        path = Path(source)
        try:
            blob = path.read_bytes()
        except FileNotFoundError:
            raise TemplateNotFoundError(source) from None
        except OSError as exc:
            raise ScaffoldError(f"Unable to read {path}: {exc.strerror or exc}") from exc
        return TemplateHandle(source, path, blob, binary=True)


class EmptyTemplateLoader:
    """Produces content-less handles, for pipelines that only create directories."""

    def load(self, source: str, properties: PropertySet) -> TemplateHandle:
        return TemplateHandle(source, _output_path(source, properties))
