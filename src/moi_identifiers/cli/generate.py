"""
moi-id CLI - generate, random and derive commands.

These commands create identifiers: from explicit parameters, from the OS
random source, or by deriving a new variant of an existing identifier.
"""

import logging
from enum import Enum
from typing import Annotated

import typer

from moi_identifiers.cli.errors import ExitCode, print_error, print_identifier_error
from moi_identifiers.cli.inspect_cmd import KindName
from moi_identifiers.cli.render import emit_json, output_format, print_identifiers, resolve_flags
from moi_identifiers.core.ids import (
    IdentifierError,
    IdentifierKind,
    decode_hex,
    generate_asset_id_v0,
    generate_logic_id_v0,
    generate_participant_id_v0,
    parse_identifier,
    random_address,
    random_asset_id_v0,
    random_fingerprint,
    random_logic_id_v0,
    random_participant_id_v0,
)
from moi_identifiers.core.ids.codec import MAX_UINT16, MAX_UINT32

logger = logging.getLogger(__name__)


class RandomTarget(str, Enum):
    """Values the random command can produce."""

    participant = "participant"
    asset = "asset"
    logic = "logic"
    address = "address"


_RANDOM_FACTORIES = {
    RandomTarget.participant: random_participant_id_v0,
    RandomTarget.asset: random_asset_id_v0,
    RandomTarget.logic: random_logic_id_v0,
}


def generate(
    ctx: typer.Context,
    kind: Annotated[KindName, typer.Argument(help="Kind of identifier to build")],
    fingerprint: Annotated[
        str | None,
        typer.Option(
            "--fingerprint",
            help="24-byte fingerprint as hex (random if omitted)",
        ),
    ] = None,
    variant: Annotated[
        int,
        typer.Option("--variant", min=0, max=MAX_UINT32, help="32-bit variant number"),
    ] = 0,
    standard: Annotated[
        int | None,
        typer.Option("--standard", min=0, max=MAX_UINT16, help="16-bit asset standard (asset only)"),
    ] = None,
    flag: Annotated[
        list[str] | None,
        typer.Option("--flag", "-f", help="Flag to set, repeatable (e.g. systemic)"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """
    Build a v0 identifier from its parts.

    Examples:
        moi-id generate asset --fingerprint 0x0102...18 --variant 66 --standard 16 -f asset_stateful
        moi-id generate participant --flag systemic
    """
    flags = resolve_flags(flag)

    if standard is not None and kind.kind != IdentifierKind.ASSET:
        print_error(
            "--standard only applies to asset identifiers",
            solution=f"moi-id generate {kind.value} without --standard",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        fp = decode_hex(fingerprint) if fingerprint is not None else random_fingerprint()
        if kind.kind == IdentifierKind.ASSET:
            identifier = generate_asset_id_v0(fp, variant, standard or 0, *flags)
        elif kind.kind == IdentifierKind.LOGIC:
            identifier = generate_logic_id_v0(fp, variant, *flags)
        else:
            identifier = generate_participant_id_v0(fp, variant, *flags)
    except IdentifierError as e:
        print_identifier_error(e)
        raise typer.Exit(ExitCode.USER_ERROR)
    except ValueError as e:
        print_error("Cannot build identifier", reason=str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    print_identifiers(ctx, [identifier], as_json)


def random(
    ctx: typer.Context,
    target: Annotated[RandomTarget, typer.Argument(help="What to generate")],
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of values to generate"),
    ] = 1,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """
    Generate random identifiers or addresses.

    Kind-specific flags are set at random; systemic is never set.

    Examples:
        moi-id random logic
        moi-id random address --count 5
    """
    logger.debug("Generating %d random %s value(s)", count, target.value)

    if target == RandomTarget.address:
        addresses = [random_address() for _ in range(count)]
        if output_format(ctx, as_json) == "json":
            emit_json([address.model_dump() for address in addresses])
        else:
            for address in addresses:
                typer.echo(address.hex())
        return

    factory = _RANDOM_FACTORIES[target]
    print_identifiers(ctx, [factory() for _ in range(count)], as_json)


def derive(
    ctx: typer.Context,
    value: Annotated[str, typer.Argument(help="Source identifier as hex")],
    variant: Annotated[
        int,
        typer.Option("--variant", min=0, max=MAX_UINT32, help="Variant number of the new identifier"),
    ],
    set_flag: Annotated[
        list[str] | None,
        typer.Option("--set", help="Flag to set on the new identifier, repeatable"),
    ] = None,
    unset_flag: Annotated[
        list[str] | None,
        typer.Option("--unset", help="Flag to clear on the new identifier, repeatable"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """
    Derive a new variant of an existing identifier.

    The tag, metadata and fingerprint are kept. Flags named with --set are
    set, then flags named with --unset are cleared.

    Examples:
        moi-id derive 0x1001... --variant 7
        moi-id derive 0x2000... --variant 1 --set logic_auxiliary --unset systemic
    """
    set_flags = resolve_flags(set_flag)
    unset_flags = resolve_flags(unset_flag)

    try:
        source = parse_identifier(value)
        derived = source.derive_variant(variant, set_flags=set_flags, unset_flags=unset_flags)
    except IdentifierError as e:
        print_identifier_error(e, value)
        raise typer.Exit(ExitCode.USER_ERROR)

    print_identifiers(ctx, [derived], as_json)
