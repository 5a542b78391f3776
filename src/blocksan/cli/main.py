"""CLI entry point for blocksan.

Invoked as::

    blocksan [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m blocksan.cli.main

Commands
--------
sanitize    Sanitize the blocks of a saved document
rules       Show the composed sanitize rules of a tool
check       Check declared sanitize rules for problems
tools       List registered tools
version     Show version information
"""
from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from blocksan.tools.registry import ToolRegistry

console = Console()
err_console = Console(stderr=True)

_tools_option = click.option(
    "--tools",
    "manifest",
    type=click.Path(exists=False),
    default=None,
    help="YAML tool manifest (defaults to the built-in tools)",
)


def _load_registry(manifest: str | None) -> "ToolRegistry":
    """Build the tool registry, exiting on a bad manifest."""
    from blocksan.config import ManifestError, load_manifest
    from blocksan.tools.builtin import default_registry

    if manifest is None:
        return default_registry()
    try:
        return load_manifest(manifest)
    except ManifestError as exc:
        err_console.print(f"[red]Manifest error:[/red] {exc}")
        sys.exit(1)


def _read_document(path: str) -> Any:
    """Read a saved JSON document, exiting on error."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except json.JSONDecodeError as exc:
        err_console.print(f"[red]Error:[/red] Invalid JSON in {path}: {exc}")
        sys.exit(1)


def _rules_to_json(rules: Any) -> Any:
    """Render rules as JSON-safe data; callables become their name."""
    if isinstance(rules, Mapping):
        return {key: _rules_to_json(value) for key, value in rules.items()}
    if callable(rules):
        return f"<callable {getattr(rules, '__name__', type(rules).__name__)}>"
    return rules


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="blocksan")
def cli() -> None:
    """Sanitize block-structured editor content."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    import bleach

    from blocksan import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]blocksan[/bold]", f"v{__version__}")
    table.add_row("bleach", bleach.__version__)
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# tools command
# ---------------------------------------------------------------------------


@cli.command(name="tools")
@_tools_option
def tools_command(manifest: str | None) -> None:
    """List registered tools and their inline toolbars."""
    from blocksan.tools.base import InlineTool

    registry = _load_registry(manifest)

    table = Table(title=f"Tools: {registry.name}")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("Inline toolbar")
    table.add_column("Declared fields")

    for name in registry.list_tools():
        cls = registry.get(name)
        toolbar = registry.get_tool_settings(name).inline_toolbar
        if isinstance(toolbar, bool):
            toolbar_text = "all" if toolbar else "-"
        else:
            toolbar_text = ", ".join(toolbar) or "-"
        declared = getattr(cls, registry.SANITIZE_CONFIG, None) or {}
        table.add_row(
            name,
            "inline" if issubclass(cls, InlineTool) else "block",
            toolbar_text,
            ", ".join(str(key) for key in declared) or "-",
        )

    console.print(table)


# ---------------------------------------------------------------------------
# rules command
# ---------------------------------------------------------------------------


@cli.command(name="rules")
@click.argument("tool")
@_tools_option
def rules_command(tool: str, manifest: str | None) -> None:
    """Show the composed sanitize rules of a tool.

    TOOL is the registered tool name, e.g. ``paragraph``.
    """
    from blocksan.composer import RuleComposer
    from blocksan.tools import ToolNotFoundError

    registry = _load_registry(manifest)
    try:
        rules = RuleComposer(registry).compose_tool_config(tool)
    except ToolNotFoundError as exc:
        err_console.print(f"[red]Error:[/red] {exc.args[0]}")
        sys.exit(1)

    text = json.dumps(_rules_to_json(rules), indent=2)
    console.print(Syntax(text, "json", line_numbers=False))


# ---------------------------------------------------------------------------
# sanitize command
# ---------------------------------------------------------------------------


@cli.command(name="sanitize")
@click.argument("file", type=click.Path(exists=False))
@_tools_option
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def sanitize_command(file: str, manifest: str | None, output: str | None) -> None:
    """Sanitize the blocks of a saved document.

    FILE is a JSON document: either ``{"blocks": [...]}`` or a bare list of
    ``{"tool": ..., "data": ...}`` records.
    """
    from blocksan.sanitizer import BlockSanitizer
    from blocksan.tools import ToolNotFoundError

    document = _read_document(file)
    blocks = document.get("blocks") if isinstance(document, dict) else document
    if not isinstance(blocks, list) or not all(
        isinstance(block, dict) and "tool" in block for block in blocks
    ):
        err_console.print(
            f"[red]Error:[/red] {file} must hold a list of blocks with a 'tool' key"
        )
        sys.exit(1)

    registry = _load_registry(manifest)
    try:
        BlockSanitizer(registry).sanitize_blocks(blocks)
    except ToolNotFoundError as exc:
        err_console.print(f"[red]Error:[/red] {exc.args[0]}")
        sys.exit(1)

    text = json.dumps(document, indent=2, ensure_ascii=False)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        err_console.print(f"[green]Sanitized {len(blocks)} block(s) to[/green] {output}")
    else:
        click.echo(text)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@_tools_option
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
def check_command(manifest: str | None, strict: bool) -> None:
    """Check declared sanitize rules for problems."""
    from blocksan.validator import Validator

    registry = _load_registry(manifest)
    diagnostics = Validator(strict=strict).validate(registry)

    if not diagnostics:
        console.print(f"[green]OK[/green] {registry.name} — no issues found")
        sys.exit(0)

    errors = [d for d in diagnostics if d.is_error]
    warnings = [d for d in diagnostics if not d.is_error]

    table = Table(title=f"Check: {registry.name}", show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Location", min_width=10)
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        loc = f"{d.tool}.{d.location}" if d.location else d.tool
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            loc,
            d.message + (f"\n[dim]hint: {d.suggestion}[/dim]" if d.suggestion else ""),
        )

    console.print(table)
    console.print(
        f"\n[bold]Summary:[/bold] {len(errors)} error(s), {len(warnings)} other finding(s)"
    )

    if errors:
        sys.exit(1)


if __name__ == "__main__":
    cli()
