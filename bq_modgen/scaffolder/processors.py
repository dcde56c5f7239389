"""Template processors: pure transformations applied between load and save.

A processor is any callable ``(TemplateHandle, PropertySet) -> TemplateHandle``.
Processors may rewrite the content, the output path or both, and must not
touch the filesystem.  Failures are reported as ``TransformError``.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from jinja2 import TemplateError

from bq_modgen.utils import package_to_path

from .errors import TransformError
from .properties import PropertySet
from .template import TemplateHandle
from .templates import TemplateRenderer

TemplateProcessor = Callable[[TemplateHandle, PropertySet], TemplateHandle]

# Placeholders used in the bundled template paths.
EXAMPLE_PACKAGE_DIR = "example"
MODULE_NAME_PLACEHOLDER = "MyModule"


class JinjaTemplateProcessor:
    """Expands ``{{ key }}`` placeholders using the property set.

    Dotted property keys are exposed with underscores (``java.package`` is
    ``{{ java_package }}``).  Missing keys expand to empty strings.  Binary
    and content-less templates pass through unchanged.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def __call__(self, template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        if template.binary or not isinstance(template.content, str):
            return template
        try:
            rendered = self.renderer.render_string(
                template.content, properties.template_context()
            )
        except TemplateError as exc:
            raise TransformError(template.source_key, str(exc)) from exc
        return template.with_content(rendered)


class JavaPackageProcessor:
    """Relocates ``.../example/...`` to the project's package directory."""

    def __call__(self, template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        package_dir = package_to_path(properties.get_string("java.package"))
        parts = template.output_path.parts
        if EXAMPLE_PACKAGE_DIR not in parts[:-1]:
            return template
        # Only the last occurrence is the package placeholder.
        index = len(parts) - 2 - parts[:-1][::-1].index(EXAMPLE_PACKAGE_DIR)
        new_path = Path(*parts[:index]) / package_dir / Path(*parts[index + 1:])
        return template.with_path(new_path)


class ModuleNamePathProcessor:
    """Renames ``MyModule*`` files to ``<module.name>Module*``."""

    def __call__(self, template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        filename = template.output_path.name
        if MODULE_NAME_PLACEHOLDER not in filename:
            return template
        module_name = properties.get_string("module.name")
        if not module_name:
            raise TransformError(template.source_key, "property 'module.name' is not set")
        new_name = filename.replace(MODULE_NAME_PLACEHOLDER, f"{module_name}Module")
        return template.with_path(template.output_path.with_name(new_name))


class ModuleProviderProcessor:
    """Fills the ``BQModuleProvider`` service file with the provider class name."""

    def __call__(self, template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        package = properties.get_string("java.package")
        module_name = properties.get_string("module.name")
        if not module_name:
            raise TransformError(template.source_key, "property 'module.name' is not set")
        provider = f"{module_name}ModuleProvider"
        qualified = f"{package}.{provider}" if package else provider
        return template.with_content(qualified + "\n")


class RenameProcessor:
    """Renames the output file while keeping its directory."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __call__(self, template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        return template.with_path(template.output_path.parent / self.name)


def lazy(factory: Callable[[], TemplateProcessor]) -> TemplateProcessor:
    """Defer building a processor until the first template reaches it.

    A pipeline whose guard never admits it, such as the parent rewrite of a
    standalone module, never builds the processor at all.
    """
    built: list[TemplateProcessor] = []

    def _process(template: TemplateHandle, properties: PropertySet) -> TemplateHandle:
        if not built:
            built.append(factory())
        return built[0](template, properties)

    return _process
