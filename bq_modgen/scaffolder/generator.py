"""Module generation orchestrator.

``ModuleGenerator`` validates the working directory, assembles the property
set and runs every registered template pipeline in order::

    VALIDATE -> BUILD_PROPS -> RUN_PIPELINES -> DONE

Build-system specifics (build file name, parent descriptor handling, extra
pipelines) come from a ``BuildFlavor`` record, so adding a flavor does not
require subclassing the generator.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.markup import escape

from bq_modgen.config import ConfigService
from bq_modgen.utils import console as default_console
from bq_modgen.utils import relative_display

from .components import NameComponents
from .errors import ScaffoldError
from .loaders import BinaryFileLoader, EmptyTemplateLoader, TemplateLoader
from .pipeline import TemplatePipeline, when_no_parent, when_parent
from .processors import (
    JavaPackageProcessor,
    JinjaTemplateProcessor,
    ModuleNamePathProcessor,
    ModuleProviderProcessor,
    RenameProcessor,
    TemplateProcessor,
    lazy,
)
from .properties import PropertySet
from .savers import DirOnlySaver, SafeBinaryContentSaver
from .store import PackageTemplateStore, TemplateStore


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


class CommandOutcome(BaseModel):
    """Result of one generation: ``code`` 0 on success, negative on error."""

    model_config = ConfigDict(frozen=True)

    code: int = 0
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.code == 0

    @classmethod
    def succeeded(cls, message: str | None = None) -> "CommandOutcome":
        return cls(code=0, message=message)

    @classmethod
    def failed(cls, code: int, message: str) -> "CommandOutcome":
        if code == 0:
            raise ValueError("a failed outcome needs a non-zero code")
        return cls(code=code, message=message)


# ---------------------------------------------------------------------------
# Build flavors
# ---------------------------------------------------------------------------


def _no_pipelines(store: TemplateStore) -> list[TemplatePipeline]:
    return []


@dataclass(frozen=True)
class BuildFlavor:
    """Everything that differs between build systems.

    Attributes:
        name: Command name, e.g. ``maven-module``.
        display_name: Human-readable build system name, e.g. ``Maven``.
        build_file_name: Build descriptor file name, e.g. ``pom.xml``.
        input_path: Template-store prefix of the flavor's templates.
        parent_parser: Reads the coordinates of an existing parent descriptor.
        parent_processor: Builds the processor that declares the new module
            in the parent descriptor.
        parent_entry: Renders the parent declaration of a module name, as
            reported once the parent has been rewritten.
        pipelines: Builds the flavor's own pipelines for a template store.
    """

    name: str
    display_name: str
    build_file_name: str
    input_path: str
    parent_parser: Callable[[Path], NameComponents]
    parent_processor: Callable[[], TemplateProcessor]
    parent_entry: Callable[[str], str]
    pipelines: Callable[[TemplateStore], list[TemplatePipeline]] = _no_pipelines


def module_pipelines(store: TemplateStore) -> list[TemplatePipeline]:
    """Pipelines shared by every flavor of Bootique module."""
    return [
        # java sources
        TemplatePipeline(
            sources=[
                "src/main/java/example/MyModule.java",
                "src/main/java/example/MyModuleProvider.java",
                "src/test/java/example/MyModuleProviderTest.java",
            ],
            loader=TemplateLoader(store),
            processors=[
                JavaPackageProcessor(),
                ModuleNamePathProcessor(),
                JinjaTemplateProcessor(),
            ],
        ),
        # folders
        TemplatePipeline(
            sources=["src/main/resources", "src/test/resources"],
            loader=EmptyTemplateLoader(),
            saver=DirOnlySaver(),
        ),
        TemplatePipeline(
            sources=["src/main/resources/META-INF/services/io.bootique.BQModuleProvider"],
            loader=TemplateLoader(store),
            processors=[ModuleProviderProcessor()],
        ),
        # a child module shares the parent's ignore rules
        TemplatePipeline(
            guard=when_no_parent,
            sources=["gitignore"],
            loader=TemplateLoader(store),
            processors=[RenameProcessor(".gitignore")],
        ),
    ]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Generates a new module directory for one build flavor.

    Pipelines are assembled once, at construction time, in the order they
    run: module sources and folders, flavor pipelines, and finally the
    parent descriptor rewrite so the parent is only touched after the module
    tree has been laid down.
    """

    def __init__(
        self,
        flavor: BuildFlavor,
        config_service: ConfigService | None = None,
        working_dir: str | Path | None = None,
        store: TemplateStore | None = None,
        console: Console | None = None,
    ) -> None:
        self.flavor = flavor
        self.config_service = config_service or ConfigService()
        self.working_dir = Path(working_dir) if working_dir is not None else Path.cwd()
        self.store = store or PackageTemplateStore()
        self.console = console or default_console
        self.parent_pipeline = TemplatePipeline(
            guard=when_parent,
            sources=[lambda p: p.get_string("parent.path")],
            loader=BinaryFileLoader(),
            processors=[lazy(flavor.parent_processor)],
            saver=SafeBinaryContentSaver(),
        )
        self.pipelines: list[TemplatePipeline] = [
            *module_pipelines(self.store),
            *flavor.pipelines(self.store),
            self.parent_pipeline,
        ]

    # -- Public API --------------------------------------------------------

    def handle(self, components: NameComponents) -> CommandOutcome:
        """Generate the module described by *components*.

        Returns:
            ``CommandOutcome.succeeded()`` or a failed outcome with code -1
            and a message for the user.  Nothing is written when the
            preconditions fail.
        """
        self.console.print(
            f"Generating new {self.flavor.display_name} module "
            f"[bold]{escape(components.name)}[/bold] ..."
        )

        output_root = self.working_dir / components.name
        if output_root.exists():
            return CommandOutcome.failed(-1, f"Directory '{components.name}' already exists")

        parent_file = self.working_dir / self.flavor.build_file_name
        parent_exists = parent_file.exists()
        if parent_exists and not _is_writable(parent_file):
            return CommandOutcome.failed(
                -1, f"Parent {self.flavor.build_file_name} file is not writable."
            )

        try:
            properties = self.build_properties(
                components, output_root, parent_file if parent_exists else None
            )
        except ScaffoldError as exc:
            return CommandOutcome.failed(-1, str(exc))

        try:
            for pipeline in self.pipelines:
                if pipeline is self.parent_pipeline:
                    on_save = partial(self._log_parent_saved, components.name)
                else:
                    on_save = self._log_saved
                pipeline.process(properties, on_save=on_save)
        except ScaffoldError as exc:
            message = str(exc)
            if output_root.exists():
                message += (
                    f" Remove the partially created '{components.name}' directory"
                    " before running the command again."
                )
            return CommandOutcome.failed(-1, message)

        self.console.print("done.")
        return CommandOutcome.succeeded()

    def build_properties(
        self,
        components: NameComponents,
        output_root: Path,
        parent_file: Path | None,
    ) -> PropertySet:
        """Assemble the rendering variables for one generation.

        Args:
            components: Coordinates of the module being generated.
            output_root: Module directory to create.
            parent_file: Existing parent descriptor, or ``None``.

        Raises:
            ScaffoldError: If the parent descriptor cannot be parsed.
        """
        bq_version = self.config_service.get(ConfigService.BQ_VERSION)
        builder = (
            PropertySet.builder()
            .with_("java.package", components.java_package)
            .with_("project.version", components.version)
            .with_("project.name", components.name)
            .with_("module.name", components.module_name)
            .with_("bq.version", bq_version)
            .with_("bq.di", bq_version.startswith("2."))
            .with_("java.version", self.config_service.get(ConfigService.JAVA_VERSION))
            .with_("output.path", output_root)
            .with_("input.path", self.flavor.input_path)
            .with_("parent", parent_file is not None)
            .with_("parent.path", parent_file if parent_file is not None else "")
        )
        if parent_file is not None:
            parent = self.flavor.parent_parser(parent_file)
            builder.with_("parent.group", parent.namespace)
            builder.with_("parent.name", parent.name)
            builder.with_("parent.version", parent.version)
        return builder.build()

    # -- Internals ---------------------------------------------------------

    def _log_saved(self, path: Path) -> None:
        self.console.print(
            f"  [green]+[/green] {escape(relative_display(path, self.working_dir))}"
        )

    def _log_parent_saved(self, module: str, path: Path) -> None:
        entry = self.flavor.parent_entry(module)
        self.console.print(
            f"  [green]+[/green] {escape(entry)} added to "
            f"{escape(relative_display(path, self.working_dir))}"
        )


def _is_writable(path: Path) -> bool:
    """True if the process may write *path* and its mode is not read-only."""
    if not os.access(path, os.W_OK):
        return False
    return bool(path.stat().st_mode & (stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH))
