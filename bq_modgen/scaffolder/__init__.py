"""bq-modgen scaffolder -- generates Bootique module directory trees.

A ``ModuleGenerator`` runs a list of declarative ``TemplatePipeline`` objects
(guard, sources, loader, processors, saver) against a ``PropertySet`` built
from the module coordinates and the tool configuration.

Quick usage::

    from bq_modgen.scaffolder import MavenModuleGenerator, NameComponents

    generator = MavenModuleGenerator(working_dir="/path/to/project")
    outcome = generator.handle(NameComponents.parse("com.acme:demo:1.0"))
"""

from bq_modgen.scaffolder.components import NameComponents
from bq_modgen.scaffolder.errors import (
    PomParseError,
    SaveError,
    ScaffoldError,
    TemplateNotFoundError,
    TransformError,
)
from bq_modgen.scaffolder.generator import BuildFlavor, CommandOutcome, ModuleGenerator
from bq_modgen.scaffolder.maven import MAVEN_MODULE, MavenModuleGenerator
from bq_modgen.scaffolder.pipeline import TemplatePipeline
from bq_modgen.scaffolder.properties import PropertySet
from bq_modgen.scaffolder.template import TemplateHandle

FLAVORS: dict[str, BuildFlavor] = {
    MAVEN_MODULE.name: MAVEN_MODULE,
}

__all__ = [
    "FLAVORS",
    "MAVEN_MODULE",
    "BuildFlavor",
    "CommandOutcome",
    "MavenModuleGenerator",
    "ModuleGenerator",
    "NameComponents",
    "PomParseError",
    "PropertySet",
    "SaveError",
    "ScaffoldError",
    "TemplateHandle",
    "TemplateNotFoundError",
    "TemplatePipeline",
    "TransformError",
]
