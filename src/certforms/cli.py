#!/usr/bin/env python
"""Validate and sanitize form values from the command line.

Usage:
    certforms list                                   # Catalog validators
    certforms check reject_reason "Too short"        # Validate one value
    certforms check signature_position '{x: 150, y: 50, width: 200, height: 80}'
    certforms form values.yaml                       # Validate a whole form
    certforms sanitize filename "my report (1).pdf"  # Sanitize a string

Values are read as YAML, so numbers, dates and mappings work. Pass --raw
to take a value as a literal string.
"""

import argparse
import logging
import sys
from typing import Any, Optional

# Enable Windows console colors
if sys.platform == "win32":
    import colorama
    colorama.init()

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from certforms import sanitizer
from certforms.config import get_settings
from certforms.validation import FormValidator, ValidationResult, get_catalog

logger = logging.getLogger(__name__)


def parse_value(text: str, raw: bool = False) -> Any:
    """Read a command line value as YAML, or as-is when `raw`."""
    if raw:
        return text
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        logger.debug("Value is not YAML, using it as a string: %r", text)
        return text


def render_result(console: Console, title: str, result: ValidationResult) -> None:
    """Print one field's result as a panel."""
    lines = ["[bold green]Valid[/bold green]" if result.is_valid else "[bold red]Invalid[/bold red]"]
    for message in result.errors:
        lines.append(f"[red]  error:[/red] {message}")
    for message in result.warnings:
        lines.append(f"[yellow]  warning:[/yellow] {message}")
    console.print(Panel("\n".join(lines), title=title))


def cmd_list(console: Console, args: argparse.Namespace) -> int:
    catalog = get_catalog()
    table = Table(title="Validators", show_header=True)
    table.add_column("Name", justify="left")
    table.add_column("Rules", justify="right")
    table.add_column("Warnings", justify="right")
    for name, validator in catalog.items():
        table.add_row(name, str(len(validator.rules)), str(len(validator.warning_rules)))
    console.print(table)
    return 0


def cmd_check(console: Console, args: argparse.Namespace) -> int:
    catalog = get_catalog()
    if args.name not in catalog:
        console.print(f"[red]Unknown validator: {args.name}[/red]")
        console.print(f"Available: {', '.join(catalog)}")
        return 1

    value = parse_value(args.value, raw=args.raw)
    result = catalog[args.name].validate(value)
    render_result(console, args.name, result)
    return 0 if result.is_valid else 1


def cmd_form(console: Console, args: argparse.Namespace) -> int:
    try:
        with open(args.file, encoding="utf-8") as f:
            values = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        console.print(f"[red]Failed to read {args.file}: {e}[/red]")
        return 1
    if not isinstance(values, dict):
        console.print(f"[red]{args.file} must contain a mapping of field names to values[/red]")
        return 1

    catalog = get_catalog()
    known = [name for name in values if name in catalog]
    for name in values:
        if name not in catalog:
            logger.info("No validator for field %s, skipping", name)

    form = FormValidator.from_catalog(known, catalog).set_values(values)
    for name, result in form.validate_all().items():
        render_result(console, name, result)

    if form.is_valid():
        console.print(f"[bold green]Form is valid[/bold green] ({len(known)} fields checked)")
        return 0
    errors = form.get_errors()
    console.print(f"[bold red]Form is invalid[/bold red] ({len(errors)} of {len(known)} fields)")
    return 1


def cmd_sanitize(console: Console, args: argparse.Namespace) -> int:
    # Plain print so the output can be piped
    print(sanitizer.sanitize(args.kind, args.value))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certforms",
        description="Validate and sanitize certificate form values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List catalog validators")

    check = subparsers.add_parser("check", help="Validate one value against a catalog validator")
    check.add_argument("name", help="Catalog validator name, e.g. reject_reason")
    check.add_argument("value", help="Value to validate (parsed as YAML)")
    check.add_argument(
        "--raw",
        action="store_true",
        help="Treat the value as a literal string instead of YAML"
    )

    form = subparsers.add_parser("form", help="Validate a YAML file of field values")
    form.add_argument("file", help="YAML mapping of field name to value")

    sanitize = subparsers.add_parser("sanitize", help="Sanitize a string")
    sanitize.add_argument("kind", choices=sorted(sanitizer.SANITIZERS), help="Sanitizer to apply")
    sanitize.add_argument("value", help="String to sanitize")

    return parser


COMMANDS = {
    "list": cmd_list,
    "check": cmd_check,
    "form": cmd_form,
    "sanitize": cmd_sanitize,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
    )

    console = Console()
    return COMMANDS[args.command](console, args)


if __name__ == "__main__":
    sys.exit(main())
