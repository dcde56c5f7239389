"""Shared utility functions for bq-modgen.

Provides the Rich console used for all user-facing output, coloured message
helpers, and the name conversions used when deriving Java identifiers from
Maven artifact names.
"""

from __future__ import annotations

import re
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary name to a safe artifact/directory name.

    * Lowercases the input.
    * Replaces spaces and characters other than alphanumerics, hyphens,
      underscores and dots with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.

    Examples::

        sanitize_name("My Module") -> "my-module"
        sanitize_name("  Demo (core)  ") -> "demo-core"
    """
    result = re.sub(r"[^a-zA-Z0-9_.-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


def module_name_from_artifact_name(artifact_name: str) -> str:
    """Derive a Java class-name prefix from a Maven artifact name.

    Examples::

        module_name_from_artifact_name("demo") -> "Demo"
        module_name_from_artifact_name("my-demo") -> "MyDemo"
        module_name_from_artifact_name("bootique.jdbc") -> "BootiqueJdbc"
    """
    parts = re.split(r"[-_.\s]+", artifact_name)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def package_to_path(java_package: str) -> Path:
    """Convert a dotted Java package to a relative directory path."""
    parts = [p for p in java_package.split(".") if p]
    return Path(*parts) if parts else Path()


def relative_display(path: Path, base: Path) -> str:
    """Return *path* relative to *base* when possible, for console output."""
    try:
        return str(path.relative_to(base))
    except ValueError:
        return str(path)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_banner(title: str, body: str, out: Console | None = None) -> None:
    """Print a framed banner, used when a command starts."""
    (out or console).print(
        Panel(body, title=f"[bold]{title}[/bold]", border_style="bright_cyan")
    )


def print_success(message: str, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]{escape(message)}[/bold red]")

