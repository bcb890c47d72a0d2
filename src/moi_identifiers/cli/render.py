"""
Shared rendering helpers for moi-id commands.

Text output goes through rich; JSON output is written with typer.echo so it
is never wrapped or highlighted and can be piped into other tools.
"""

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from moi_identifiers.cli.errors import ExitCode, print_unknown_flag_error
from moi_identifiers.core.ids import (
    ALL_FLAGS,
    Flag,
    IdentifierError,
    IdentifierKind,
    flags_for,
    lookup_flag,
    parse_identifier,
)
from moi_identifiers.core.ids.models import IdentifierModel

console = Console()


def output_format(ctx: typer.Context, as_json: bool) -> str:
    """Resolve the output format: --json wins, then the loaded config."""
    if as_json:
        return "json"
    config = (ctx.obj or {}).get("config")
    return config.output.format if config is not None else "text"


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


def resolve_flags(names: list[str] | None) -> list[Flag]:
    """
    Map --flag/--set/--unset names to catalogue flags.

    Exits with USER_ERROR on the first unknown name.
    """
    flags = []
    for name in names or []:
        try:
            flags.append(lookup_flag(name))
        except KeyError:
            print_unknown_flag_error(name, [flag.name for flag in ALL_FLAGS])
            raise typer.Exit(ExitCode.USER_ERROR)
    return flags


def describe(identifier: IdentifierModel) -> dict[str, Any]:
    """
    Break an identifier down into its slots.

    Works for any 32-byte value: unknown kinds are reported with their raw
    nibble and validity is reported rather than raised.
    """
    generic = identifier.as_identifier()
    tag = generic.tag
    kind = tag.kind

    try:
        typed = parse_identifier(generic)
        error = None
    except IdentifierError as e:
        typed = None
        error = f"{type(e).__name__}: {e}"

    description: dict[str, Any] = {
        "hex": generic.hex(),
        "tag": f"{int(tag):#04x}",
        "kind": kind.label if isinstance(kind, IdentifierKind) else None,
        "kind_nibble": int(kind),
        "version": tag.version,
        "flags": f"{generic.flags:#010b}",
        "flag_states": {flag.name: generic.flag(flag) for flag in flags_for(tag)},
        "metadata": "0x" + generic.metadata.hex(),
        "fingerprint": "0x" + generic.fingerprint.hex(),
        "variant": generic.variant,
        "valid": typed is not None,
        "error": error,
    }
    if kind == IdentifierKind.ASSET:
        description["standard"] = int.from_bytes(generic.metadata, "big")
    return description


def print_description(description: dict[str, Any]) -> None:
    """Render a describe() result as a two-column table."""
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    kind = description["kind"] or f"unknown ({description['kind_nibble']:#x})"
    table.add_row("Identifier", description["hex"])
    table.add_row("Tag", f"{description['tag']} ({kind} v{description['version']})")
    table.add_row("Flags", description["flags"])
    for name, state in description["flag_states"].items():
        mark = "[green]set[/green]" if state else "[dim]unset[/dim]"
        table.add_row(f"  {name}", mark)
    table.add_row("Metadata", description["metadata"])
    if "standard" in description:
        table.add_row("  standard", str(description["standard"]))
    table.add_row("Fingerprint", description["fingerprint"])
    table.add_row("Variant", str(description["variant"]))
    if description["valid"]:
        table.add_row("Valid", "[green]yes[/green]")
    else:
        table.add_row("Valid", f"[red]no[/red] ({description['error']})")

    console.print(table)


def print_identifiers(ctx: typer.Context, identifiers: list[IdentifierModel], as_json: bool) -> None:
    """Print identifiers one hex per line, or as a JSON list of descriptions."""
    if output_format(ctx, as_json) == "json":
        emit_json([describe(identifier) for identifier in identifiers])
        return
    for identifier in identifiers:
        typer.echo(identifier.hex())
