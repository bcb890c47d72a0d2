"""
moi-id CLI - inspect and validate commands.

inspect breaks any 32-byte value down into its slots and reports whether it
is a valid identifier. validate checks a value against one specific kind.
"""

import logging
from enum import Enum
from typing import Annotated

import typer

from moi_identifiers.cli.errors import ExitCode, print_identifier_error
from moi_identifiers.cli.render import (
    console,
    describe,
    emit_json,
    output_format,
    print_description,
)
from moi_identifiers.core.ids import Identifier, IdentifierError, IdentifierKind
from moi_identifiers.core.ids.models import KIND_MODELS

logger = logging.getLogger(__name__)


class KindName(str, Enum):
    """Identifier kinds accepted on the command line."""

    participant = "participant"
    asset = "asset"
    logic = "logic"

    @property
    def kind(self) -> IdentifierKind:
        return IdentifierKind[self.name.upper()]


def inspect(
    ctx: typer.Context,
    value: Annotated[str, typer.Argument(help="Identifier as hex (0x prefix optional)")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """
    Decode an identifier and show its tag, flags, metadata and variant.

    Any 32-byte value can be inspected; invalid identifiers are reported as
    such instead of failing.

    Examples:
        moi-id inspect 0x1001001001020304050607081112131415161718212223242526272800000042
        moi-id inspect 0x00800000... --json
    """
    try:
        identifier = Identifier.from_hex(value)
    except IdentifierError as e:
        print_identifier_error(e, value)
        raise typer.Exit(ExitCode.USER_ERROR)

    description = describe(identifier)

    if output_format(ctx, as_json) == "json":
        emit_json(description)
        return

    print_description(description)


def validate(
    kind: Annotated[KindName, typer.Argument(help="Expected identifier kind")],
    value: Annotated[str, typer.Argument(help="Identifier as hex (0x prefix optional)")],
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Print nothing, only set the exit code"),
    ] = False,
) -> None:
    """
    Check that a value is a valid identifier of the given kind.

    Exits 0 when valid and 2 when not, printing the error class and message.

    Examples:
        moi-id validate asset 0x1001001001020304050607081112131415161718212223242526272800000042
        moi-id validate participant 0x10... -q || echo "not a participant"
    """
    model = KIND_MODELS[kind.kind]
    try:
        identifier = model.from_hex(value)
    except IdentifierError as e:
        logger.debug("validate %s %s failed: %r", kind.value, value, e)
        if not quiet:
            print_identifier_error(e, value)
        raise typer.Exit(ExitCode.USER_ERROR)

    if not quiet:
        console.print(f"[green]✓[/green] valid {kind.value} id (variant {identifier.variant})")
