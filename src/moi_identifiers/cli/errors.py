"""
Standardized error handling and exit codes for the moi-id CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from moi_identifiers.core.ids import (
    HexDecodeError,
    IdentifierError,
    InvalidLengthError,
    InvalidTagError,
    MalformedFlagsError,
    MissingHexPrefixError,
    UnsupportedFlagError,
)

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for moi-id CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error."""

    USER_ERROR = 2
    """Invalid identifier or argument (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Invalid identifier",
        ...     reason="invalid tag: not an asset id",
        ...     solution="moi-id inspect 0x00...",
        ... )
    """
    console.print(f"[red]Error:[/red] {escape(problem)}")

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}")


def _solution_for(error: IdentifierError) -> str | None:
    if isinstance(error, MissingHexPrefixError):
        return "prefix the value with 0x"
    if isinstance(error, (InvalidLengthError, HexDecodeError)):
        return "pass 64 hex characters (32 bytes), e.g. 0x" + "00" * 32
    if isinstance(error, InvalidTagError):
        return "moi-id inspect <hex>  # to see which kind the tag names"
    if isinstance(error, (MalformedFlagsError, UnsupportedFlagError)):
        return "moi-id inspect <hex>  # to list the flags this kind supports"
    return None


def print_identifier_error(error: IdentifierError, value: str | None = None) -> None:
    """Print an IdentifierError with its class name and a hint."""
    problem = f"Invalid identifier: {value}" if value else "Invalid identifier"
    print_error(
        problem,
        reason=f"{type(error).__name__}: {error}",
        solution=_solution_for(error),
    )


def print_unknown_flag_error(name: str, known: list[str]) -> None:
    """Print error when a --flag/--set/--unset name is not in the catalogue."""
    print_error(
        f"Unknown flag '{name}'",
        reason=f"Known flags: {', '.join(known)}",
    )
