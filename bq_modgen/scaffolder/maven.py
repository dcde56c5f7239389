"""Maven flavor of the module generator."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from bq_modgen.config import ConfigService

from .generator import BuildFlavor, ModuleGenerator
from .loaders import TemplateLoader
from .pipeline import TemplatePipeline
from .pom import ParentPomProcessor, PomParser
from .processors import JinjaTemplateProcessor
from .store import TemplateStore

BUILD_FILE = "pom.xml"
BUILD_SYSTEM = "Maven"
INPUT_PATH = "templates/maven-module/"


def maven_pipelines(store: TemplateStore) -> list[TemplatePipeline]:
    return [
        # pom.xml
        TemplatePipeline(
            sources=["pom.xml"],
            loader=TemplateLoader(store),
            processors=[JinjaTemplateProcessor()],
        ),
    ]


def module_entry(name: str) -> str:
    return f"<module>{name}</module>"


MAVEN_MODULE = BuildFlavor(
    name="maven-module",
    display_name=BUILD_SYSTEM,
    build_file_name=BUILD_FILE,
    input_path=INPUT_PATH,
    parent_parser=PomParser().parse,
    parent_processor=ParentPomProcessor,
    parent_entry=module_entry,
    pipelines=maven_pipelines,
)


class MavenModuleGenerator(ModuleGenerator):
    """``ModuleGenerator`` preconfigured for Maven."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        working_dir: str | Path | None = None,
        store: TemplateStore | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(MAVEN_MODULE, config_service, working_dir, store, console)
