"""Shared pytest fixtures for the bq-modgen test suite.

Provides reusable fixtures for:
- Temporary working directories, with and without a parent pom.xml
- Config services pinned to known Bootique / Java versions
- A silent Rich console
- Property sets shaped like the ones the generator builds
"""

from __future__ import annotations

import io
import textwrap
from pathlib import Path
from typing import Any, Callable

import pytest
from rich.console import Console

from bq_modgen.config import Config, ConfigService
from bq_modgen.scaffolder import MavenModuleGenerator, NameComponents, PropertySet


PARENT_POM = textwrap.dedent("""\
    <?xml version="1.0" encoding="UTF-8"?>
    <project xmlns="http://maven.apache.org/POM/4.0.0"
             xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
             xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd">
        <modelVersion>4.0.0</modelVersion>

        <groupId>com.acme</groupId>
        <artifactId>suite</artifactId>
        <version>2.5</version>
        <packaging>pom</packaging>

        <properties>
            <java.version>17</java.version>
        </properties>

        <dependencies>
            <dependency>
                <groupId>io.bootique</groupId>
                <artifactId>bootique</artifactId>
            </dependency>
        </dependencies>
    </project>
""")


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def working_dir(tmp_path: Path) -> Path:
    """Empty working directory the module is generated into."""
    wd = tmp_path / "work"
    wd.mkdir()
    return wd


@pytest.fixture
def parent_pom_text() -> str:
    """Text of the com.acme:suite:2.5 parent pom, without a <modules> section."""
    return PARENT_POM


@pytest.fixture
def parent_pom(working_dir: Path) -> Path:
    """A multi-module parent pom.xml (com.acme:suite:2.5) in the working dir."""
    path = working_dir / "pom.xml"
    path.write_text(PARENT_POM, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def config_service() -> ConfigService:
    """Config service returning BQ_VERSION=3.0.0 and JAVA_VERSION=17."""
    return ConfigService(Config(bq_version="3.0.0", java_version="17"))


@pytest.fixture
def quiet_console() -> Console:
    """Rich console writing to an in-memory buffer."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def demo_components() -> NameComponents:
    return NameComponents(namespace="com.acme", name="demo", version="1.0")


@pytest.fixture
def generator(
    working_dir: Path, config_service: ConfigService, quiet_console: Console
) -> MavenModuleGenerator:
    """Maven generator bound to the temporary working directory."""
    return MavenModuleGenerator(
        config_service=config_service,
        working_dir=working_dir,
        console=quiet_console,
    )


@pytest.fixture
def make_properties(working_dir: Path) -> Callable[..., PropertySet]:
    """Factory for property sets shaped like the generator's output."""

    def _make(**overrides: Any) -> PropertySet:
        values: dict[str, Any] = {
            "java.package": "com.acme",
            "project.name": "demo",
            "project.version": "1.0",
            "module.name": "Demo",
            "bq.version": "3.0.0",
            "bq.di": False,
            "java.version": "17",
            "output.path": working_dir / "demo",
            "input.path": "templates/maven-module/",
            "parent": False,
            "parent.path": "",
        }
        values.update({k.replace("__", "."): v for k, v in overrides.items()})
        return PropertySet(values)

    return _make
