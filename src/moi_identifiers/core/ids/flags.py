"""
Identifier flags.

Every identifier reserves its second byte for eight boolean flags. Bit 7 is
the MSB and bit 0 the LSB. A Flag describes how one of those bits is
interpreted: its bit index and, per kind, the minimum tag version from which
the flag is legal. The stored data is only the raw flags byte.

Catalogue:
    SYSTEMIC         bit 7   all kinds, from v0
    ASSET_STATEFUL   bit 0   asset, from v0
    ASSET_LOGICAL    bit 1   asset, from v0
    LOGIC_INTRINSIC  bit 0   logic, from v0
    LOGIC_EXTRINSIC  bit 1   logic, from v0
    LOGIC_AUXILIARY  bit 2   logic, from v0
"""

from dataclasses import dataclass
from functools import lru_cache

from moi_identifiers.core.ids.tags import IdentifierKind, IdentifierTag

MAX_FLAG_INDEX = 7
MAX_FLAG_VERSION = 0x0F


@dataclass(frozen=True)
class Flag:
    """
    Flag specifier for the flags byte of an identifier.

    Attributes:
        name: Catalogue name, e.g. "asset_stateful"
        index: Bit index 0 (LSB) to 7 (MSB)
        support: Pairs of (kind, minimum supported version)
    """

    name: str
    index: int
    support: tuple[tuple[IdentifierKind, int], ...]

    def __post_init__(self) -> None:
        if not 0 <= self.index <= MAX_FLAG_INDEX:
            raise ValueError("invalid flag location: must be between 0 and 7")
        for _, version in self.support:
            if not 0 <= version <= MAX_FLAG_VERSION:
                raise ValueError("invalid flag version: must be between 0 and 15")

    def min_version(self, kind: IdentifierKind | int) -> int | None:
        """Minimum tag version of kind that supports this flag, or None."""
        for supported_kind, version in self.support:
            if supported_kind == kind:
                return version
        return None

    def supports(self, tag: IdentifierTag | int) -> bool:
        """
        Check whether the flag is legal for a tag.

        False if the tag's kind is not in the support table, or if the
        tag's version is below the minimum version for that kind.
        """
        tag = IdentifierTag(tag)
        version = self.min_version(tag.kind)
        if version is None:
            return False
        return tag.version >= version

    def __str__(self) -> str:
        return self.name


def make_flag(name: str, kind: IdentifierKind, index: int, version: int) -> Flag:
    """Build a flag supported by a single kind from the given version on."""
    return Flag(name=name, index=index, support=((kind, version),))


def get_flag(value: int, index: int) -> bool:
    """Read the bit at index (0-7) of a flags byte."""
    _check_index(index)
    return value & (1 << index) != 0


def set_flag(value: int, index: int, flag: bool) -> int:
    """Return the flags byte with the bit at index (0-7) set or cleared."""
    _check_index(index)
    if flag:
        return value | (1 << index)
    return value & ~(1 << index) & 0xFF


def _check_index(index: int) -> None:
    if not 0 <= index <= MAX_FLAG_INDEX:
        raise ValueError(f"flag index must be between 0 and 7, got {index}")


# Account belongs to the system. Shared MSB across every kind.
SYSTEMIC = Flag(
    name="systemic",
    index=7,
    support=(
        (IdentifierKind.PARTICIPANT, 0),
        (IdentifierKind.ASSET, 0),
        (IdentifierKind.LOGIC, 0),
    ),
)

# Asset has stateful information such as its supply
ASSET_STATEFUL = make_flag("asset_stateful", IdentifierKind.ASSET, 0, 0)
# Asset has logic associated with it
ASSET_LOGICAL = make_flag("asset_logical", IdentifierKind.ASSET, 1, 0)

# Logic manages intrinsic state
LOGIC_INTRINSIC = make_flag("logic_intrinsic", IdentifierKind.LOGIC, 0, 0)
# Logic manages extrinsic state
LOGIC_EXTRINSIC = make_flag("logic_extrinsic", IdentifierKind.LOGIC, 1, 0)
# Logic is attached as an auxiliary to another object
LOGIC_AUXILIARY = make_flag("logic_auxiliary", IdentifierKind.LOGIC, 2, 0)

ALL_FLAGS: tuple[Flag, ...] = (
    SYSTEMIC,
    ASSET_STATEFUL,
    ASSET_LOGICAL,
    LOGIC_INTRINSIC,
    LOGIC_EXTRINSIC,
    LOGIC_AUXILIARY,
)


@lru_cache(maxsize=None)
def flag_mask(tag: IdentifierTag | int) -> int:
    """
    Mask of flag bits that are NOT allowed for a tag.

    A set bit marks a position no catalogue flag claims for this tag. An
    identifier is well-formed only if flags & flag_mask(tag) == 0.

    Example:
        >>> bin(flag_mask(0x10))
        '0b1111100'
    """
    allowed = 0
    for flag in ALL_FLAGS:
        if flag.supports(tag):
            allowed |= 1 << flag.index
    return ~allowed & 0xFF


def flags_for(tag: IdentifierTag | int) -> list[Flag]:
    """Catalogue flags supported by a tag, ordered by bit index (MSB first)."""
    return sorted(
        (flag for flag in ALL_FLAGS if flag.supports(tag)),
        key=lambda flag: flag.index,
        reverse=True,
    )


def lookup_flag(name: str) -> Flag:
    """
    Find a catalogue flag by name (case-insensitive, '-' and '_' equivalent).

    Raises:
        KeyError: If no flag has that name
    """
    normalized = name.strip().lower().replace("-", "_")
    for flag in ALL_FLAGS:
        if flag.name == normalized:
            return flag
    raise KeyError(f"unknown flag: {name}")
