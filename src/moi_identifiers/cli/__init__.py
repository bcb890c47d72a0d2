"""
moi-id CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys

import typer
from pydantic import ValidationError
from rich.console import Console

from moi_identifiers import __version__
from moi_identifiers.cli import generate, inspect_cmd
from moi_identifiers.cli.errors import ExitCode, print_error
from moi_identifiers.core.config import load_config, load_layered_env

# Help panel names for command grouping
PANEL_READ = "Read Identifiers"
PANEL_CREATE = "Create Identifiers"

app = typer.Typer(
    name="moi-id",
    help="Inspect, validate and generate 32-byte protocol identifiers",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False, level: int = logging.WARNING) -> None:
    """
    Configure logging for CLI commands.

    Args:
        debug: If True, enable DEBUG level logging regardless of level
        level: Level to use when debug is off (from config)
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    moi-id - 32-byte protocol identifiers.

    Identifiers name participant, asset and logic accounts:

        [tag:1][flags:1][metadata:2][fingerprint:24][variant:4]

    Common Workflows:
        moi-id inspect 0x1001...             # Break an identifier down
        moi-id validate asset 0x1001...      # Check it against a kind
        moi-id generate logic -f systemic    # Build one from parts
        moi-id random asset --count 3        # Throwaway test values
        moi-id derive 0x1001... --variant 2  # New variant, same fingerprint
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    try:
        config = load_config()
    except ValidationError as e:
        print_error(
            "Invalid configuration",
            reason=str(e),
            solution="check .moi-id.json and ~/.config/moi-identifiers/config.json",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    setup_logging(debug, config.logging.as_int())

    ctx.obj = {"debug": debug, "config": config}


# =============================================================================
# Read Identifiers
# =============================================================================

app.command(name="inspect", rich_help_panel=PANEL_READ)(inspect_cmd.inspect)
app.command(name="validate", rich_help_panel=PANEL_READ)(inspect_cmd.validate)


# =============================================================================
# Create Identifiers
# =============================================================================

app.command(name="generate", rich_help_panel=PANEL_CREATE)(generate.generate)
app.command(name="random", rich_help_panel=PANEL_CREATE)(generate.random)
app.command(name="derive", rich_help_panel=PANEL_CREATE)(generate.derive)


@app.command()
def version() -> None:
    """Show moi-id version and exit."""
    console.print(f"moi-id version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
