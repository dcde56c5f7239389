"""Command-line entry point.

Usage::

    bq-modgen maven-module com.acme:demo:1.0
    python -m bq_modgen maven-module com.acme:demo --bq-version 2.0.2
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from bq_modgen.config import Config, ConfigService
from bq_modgen.scaffolder import FLAVORS, ModuleGenerator, NameComponents
from bq_modgen.utils import console, print_banner, print_error, print_success


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bq-modgen",
        description="Generate a new Bootique module, optionally inside an existing multi-module project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  bq-modgen maven-module com.acme:demo\n"
            "  bq-modgen maven-module com.acme:demo:1.0 --dir ./suite\n"
            "  bq-modgen maven-module com.acme:demo --bq-version 2.0.2 --java-version 11\n"
        ),
    )
    parser.add_argument(
        "flavor",
        choices=sorted(FLAVORS),
        help="Kind of module to generate",
    )
    parser.add_argument(
        "coordinates",
        help="Module coordinates as group:name[:version]",
    )
    parser.add_argument(
        "--dir", "-d",
        default=None,
        help="Working directory (default: current directory)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file with bq_version / java_version",
    )
    parser.add_argument(
        "--bq-version",
        default=None,
        help="Bootique version for the generated module",
    )
    parser.add_argument(
        "--java-version",
        default=None,
        help="Java version for the generated module",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Resolve configuration: defaults, then ``--config``, then env, then flags."""
    config = Config.load(Path(args.config)) if args.config else Config()
    config = Config.from_env(config)
    overrides = {}
    if args.bq_version:
        overrides["bq_version"] = args.bq_version
    if args.java_version:
        overrides["java_version"] = args.java_version
    if overrides:
        config = Config(**{**config.model_dump(), **overrides})
    return config


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``bq-modgen`` / ``python -m bq_modgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        components = NameComponents.parse(args.coordinates)
    except ValueError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    working_dir = Path(args.dir) if args.dir else Path.cwd()
    if not working_dir.is_dir():
        print_error(f"Error: working directory not found: {working_dir}")
        sys.exit(1)

    try:
        config = load_config(args)
    except (OSError, ValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        sys.exit(1)

    flavor = FLAVORS[args.flavor]
    print_banner(
        "bq-modgen",
        f"Module  : {components}\n"
        f"Flavor  : {flavor.display_name}\n"
        f"Bootique: {config.bq_version}\n"
        f"Java    : {config.java_version}",
    )

    generator = ModuleGenerator(
        flavor,
        config_service=ConfigService(config),
        working_dir=working_dir,
        console=console,
    )
    outcome = generator.handle(components)

    if outcome.success:
        print_success(f"Module '{components.name}' generated.")
        return 0
    print_error(f"Error: {outcome.message}")
    sys.exit(1)


if __name__ == "__main__":
    main()
