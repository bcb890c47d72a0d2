"""
Identifier kinds and tags.

The tag is the first byte of every identifier. Its high nibble holds the
IdentifierKind and its low nibble the version of that kind's format:

    0x10 -> kind 1 (asset), version 0

Using whole nibbles leaves room for 16 kinds and 16 versions per kind, and
keeps both readable in the hex form of an identifier.
"""

import enum

from moi_identifiers.core.ids.errors import UnsupportedKindError, UnsupportedVersionError


class IdentifierKind(enum.IntEnum):
    """Recognized identifier kinds."""

    PARTICIPANT = 0
    ASSET = 1
    LOGIC = 2

    @property
    def label(self) -> str:
        """Lowercase name used in messages and on the command line."""
        return self.name.lower()


MAX_IDENTIFIER_KIND = IdentifierKind.LOGIC

# Maximum supported version per kind
KIND_SUPPORT: dict[IdentifierKind, int] = {
    IdentifierKind.PARTICIPANT: 0,
    IdentifierKind.ASSET: 0,
    IdentifierKind.LOGIC: 0,
}


class IdentifierTag(int):
    """
    One-byte tag: kind in the high nibble, version in the low nibble.

    Extraction never fails. A kind nibble beyond the known kinds is returned
    as a plain int and rejected only by validate().
    """

    __slots__ = ()

    def __new__(cls, value: int) -> "IdentifierTag":
        if not 0 <= value <= 0xFF:
            raise ValueError(f"tag must be a single byte, got {value}")
        return super().__new__(cls, value)

    @classmethod
    def of(cls, kind: int, version: int) -> "IdentifierTag":
        """Build a tag from a kind and a version (each 0-15)."""
        if not 0 <= kind <= 0x0F:
            raise ValueError(f"tag kind must be between 0 and 15, got {kind}")
        if not 0 <= version <= 0x0F:
            raise ValueError(f"tag version must be between 0 and 15, got {version}")
        return cls((kind << 4) | version)

    @property
    def kind(self) -> IdentifierKind | int:
        """Kind from the upper 4 bits."""
        nibble = int(self) >> 4
        try:
            return IdentifierKind(nibble)
        except ValueError:
            return nibble

    @property
    def version(self) -> int:
        """Version from the lower 4 bits."""
        return int(self) & 0x0F

    def validate(self) -> None:
        """
        Check that the kind is known and the version is supported for it.

        Raises:
            UnsupportedKindError: If the kind exceeds the known kinds
            UnsupportedVersionError: If the version exceeds the kind's maximum
        """
        kind = self.kind
        if kind > MAX_IDENTIFIER_KIND:
            raise UnsupportedKindError(int(kind))

        if self.version > KIND_SUPPORT[IdentifierKind(kind)]:
            raise UnsupportedVersionError(int(kind), self.version)

    def is_valid(self) -> bool:
        """Return True if validate() would pass."""
        try:
            self.validate()
        except (UnsupportedKindError, UnsupportedVersionError):
            return False
        return True

    def flag_mask(self) -> int:
        """Bit positions of the flags byte that are not permitted for this tag."""
        from moi_identifiers.core.ids.flags import flag_mask

        return flag_mask(self)

    def __repr__(self) -> str:
        return f"IdentifierTag({int(self):#04x})"


TAG_PARTICIPANT_V0 = IdentifierTag.of(IdentifierKind.PARTICIPANT, 0)
TAG_ASSET_V0 = IdentifierTag.of(IdentifierKind.ASSET, 0)
TAG_LOGIC_V0 = IdentifierTag.of(IdentifierKind.LOGIC, 0)
