"""Declarative template pipelines.

A ``TemplatePipeline`` is one unit of work that turns zero or more template
sources into files::

    guard -> enumerate sources -> load -> processor chain -> save

Every stage is a plain value on the dataclass, so a pipeline for resource
directories and one for the parent descriptor differ only in the loader,
processors and saver they are declared with.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .errors import ScaffoldError
from .loaders import Loader, TemplateLoader
from .processors import TemplateProcessor
from .properties import PropertySet
from .savers import Saver, TextContentSaver
from .template import TemplateHandle

SourceSpec = Union[str, Callable[[PropertySet], str]]
Guard = Callable[[Sequence[SourceSpec], PropertySet], bool]
SaveListener = Callable[[Path], None]


def always(sources: Sequence[SourceSpec], properties: PropertySet) -> bool:
    return True


def when_parent(sources: Sequence[SourceSpec], properties: PropertySet) -> bool:
    """Guard admitting the pipeline only inside a multi-module project."""
    return properties.get_bool("parent", False)


def when_no_parent(sources: Sequence[SourceSpec], properties: PropertySet) -> bool:
    """Guard admitting the pipeline only for a standalone module."""
    return not properties.get_bool("parent", False)


def resolve_sources(sources: Sequence[SourceSpec], properties: PropertySet) -> list[str]:
    """Expand source specs into concrete source keys.

    Callables are evaluated against *properties*; empty results are dropped
    and duplicates keep their first position.
    """
    resolved: list[str] = []
    seen: set[str] = set()
    for spec in sources:
        key = spec(properties) if callable(spec) else spec
        key = str(key) if key is not None else ""
        if not key or key in seen:
            continue
        seen.add(key)
        resolved.append(key)
    return resolved


@dataclass
class TemplatePipeline:
    """One ordered composition of guard, sources, loader, processors and saver."""

    sources: list[SourceSpec] = field(default_factory=list)
    guard: Guard = always
    loader: Loader = field(default_factory=TemplateLoader)
    processors: list[TemplateProcessor] = field(default_factory=list)
    saver: Saver = field(default_factory=TextContentSaver)

    def process(
        self, properties: PropertySet, on_save: SaveListener | None = None
    ) -> list[Path]:
        """Run the pipeline for *properties*.

        Args:
            properties: The generation's property set.
            on_save: Optional callback invoked with each written path.

        Returns:
            Paths written, in source order.  Templates the saver left
            untouched are not listed.  Empty when the guard rejects the
            property set.

        Raises:
            ScaffoldError: If any stage fails; later sources are not processed.
        """
        if not self.guard(self.sources, properties):
            return []

        written: list[Path] = []
        for source in resolve_sources(self.sources, properties):
            template = self.loader.load(source, properties)
            for processor in self.processors:
                template = processor(template, properties)
            _check_output_path(template, properties)
            path = self.saver.save(template, properties)
            if path is None:
                continue
            written.append(path)
            if on_save is not None:
                on_save(path)
        return written


def _check_output_path(template: TemplateHandle, properties: PropertySet) -> None:
    """Reject handles that would be written outside the module or parent file."""
    target = _normalize(template.output_path)
    parent_path = properties.get_path("parent.path")
    if properties.get_bool("parent") and parent_path is not None:
        if target == _normalize(parent_path):
            return
    root = properties.get_path("output.path")
    if root is not None:
        root = _normalize(root)
        if target == root or root in target.parents:
            return
    raise ScaffoldError(
        f"Refusing to write {template.output_path}: outside of the module directory"
    )


def _normalize(path: Path) -> Path:
    return path.absolute().resolve(strict=False)
