"""
Command-line interface for dalgen.

Usage::

    dalgen generate models/models.toml -o models --package models
    dalgen inspect models/models.toml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigError,
    GeneratorConfig,
    GenerationReport,
    OutputError,
    SchemaError,
    TemplateError,
    derive_tables,
    generate_from_file,
    load_config,
)
from .codegen.core.clauses import sorted_columns
from .codegen.core.naming import struct_name
from .logging_config import get_logger, setup_logging
from .utils import SchemaLoadError, load_schema

logger = get_logger(__name__)

console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dalgen",
        description="Generate Go data access code from a TOML table schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dalgen generate models/models.toml
  dalgen generate schema.toml -o internal/models --package models
  dalgen generate --config dalgen.json --no-format
  dalgen inspect schema.toml
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v info, -vv debug)",
    )

    # Subcommands accept -v too; SUPPRESS leaves a top-level count untouched
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=argparse.SUPPRESS,
        help="Increase logging verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate", parents=[common], help="Generate one Go file per table"
    )
    generate.add_argument("schema", nargs="?", help="TOML schema file")
    generate.add_argument("--output", "-o", metavar="DIR", help="Output directory")
    generate.add_argument("--package", "--package-name", dest="package_name", help="Go package name")
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--no-format",
        action="store_true",
        help="Don't run gofmt/goimports on generated files",
    )
    generate.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add doc comments to generated code",
    )
    generate.add_argument(
        "--dry-run",
        action="store_true",
        help="Render every table but don't write any file",
    )
    generate.set_defaults(func=_handle_generate)

    inspect = subparsers.add_parser(
        "inspect", parents=[common], help="Show the inferred keys of every table"
    )
    inspect.add_argument("schema", nargs="?", help="TOML schema file")
    inspect.add_argument("--config", metavar="FILE", help="JSON configuration file")
    inspect.set_defaults(func=_handle_inspect)

    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides: Dict[str, Any] = {}

    if getattr(args, "schema", None):
        overrides["schema_file"] = args.schema

    if getattr(args, "output", None):
        overrides["output_dir"] = args.output

    if getattr(args, "package_name", None):
        overrides["package_name"] = args.package_name

    if getattr(args, "no_format", False):
        overrides["run_formatters"] = False

    if getattr(args, "no_comments", False):
        overrides["add_comments"] = False

    try:
        return load_config(custom_config=overrides, config_file=getattr(args, "config", None))
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e


def _print_report(report: GenerationReport, dry_run: bool):
    """Print per-table results."""
    table = Table(title="📦 Generated Tables", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Table", style="bold")
    table.add_column("File", style="cyan")
    table.add_column("Write", style="dim")
    table.add_column("Status")

    for result in report.results:
        derived = report.tables[result.table_name]
        strategy = "upsert" if derived.upsert else "insert/update"
        if result.success:
            status = "[green]✓ rendered[/green]" if dry_run else "[green]✓ written[/green]"
        else:
            status = f"[red]✗ {escape(result.error_message)}[/red]"
        table.add_row(result.table_name, result.filename, strategy, status)

    console.print(table)


def _handle_generate(args: argparse.Namespace) -> int:
    config = _build_config(args)
    schema_file = Path(config.schema_file)

    report = generate_from_file(schema_file, config, dry_run=args.dry_run)
    _print_report(report, args.dry_run)

    if report.removed:
        console.print(f"[dim]Removed {len(report.removed)} previously generated file(s)[/dim]")

    if not report.success:
        console.print(f"[red]✗ {report.summary()}[/red]")
        return 1

    console.print(f"[green]✓[/green] {report.summary()}")
    return 0


def _handle_inspect(args: argparse.Namespace) -> int:
    config = _build_config(args)
    schema = load_schema(config.schema_file)
    tables = derive_tables(schema)

    table = Table(title="🔑 Inferred Keys", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Table", style="bold green", no_wrap=True)
    table.add_column("Struct", style="cyan")
    table.add_column("Primary Keys")
    table.add_column("Foreign Keys", style="blue")
    table.add_column("Write", style="dim")

    for name in sorted(tables):
        derived = tables[name]
        table.add_row(
            name,
            struct_name(name),
            ", ".join(sorted_columns(derived.primary_keys)),
            ", ".join(sorted_columns(derived.foreign_keys)) or "[dim]none[/dim]",
            "upsert" if derived.upsert else "insert/update",
        )

    console.print(table)
    return 0


def cli_main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the CLI and return the exit code.

    Args:
        argv: Arguments (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, 1 for any error)
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return args.func(args)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
    except SchemaLoadError as e:
        console.print(f"[red]✗ Invalid schema:[/red] {escape(str(e))}")
    except SchemaError as e:
        console.print(f"[red]✗ Configuration error:[/red] {escape(str(e))}")
    except TemplateError as e:
        console.print(f"[red]✗ Template error:[/red] {escape(str(e))}")
    except OutputError as e:
        console.print(f"[red]✗ Output error:[/red] {escape(str(e))}")
    except ConfigError as e:
        console.print(f"[red]✗ Configuration error:[/red] {escape(str(e))}")
    return 1


def main() -> None:
    """Console script entry point."""
    sys.exit(cli_main())
