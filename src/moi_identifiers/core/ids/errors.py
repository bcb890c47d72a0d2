"""
Error taxonomy for identifier construction and validation.

Every failure caused by malformed input is raised as a subclass of
IdentifierError, which itself is a ValueError so that pydantic and other
callers that expect ValueError for bad input keep working.

Hierarchy:
    IdentifierError
    ├── InvalidTagError
    │   ├── UnsupportedKindError
    │   ├── UnsupportedVersionError
    │   └── WrongKindError
    ├── MalformedFlagsError
    ├── UnsupportedFlagError
    ├── InvalidLengthError
    ├── MissingHexPrefixError
    └── HexDecodeError

Programming errors (flag bit index out of range, variant that does not fit in
32 bits) are not part of this taxonomy and raise plain ValueError.
"""


class IdentifierError(ValueError):
    """Base exception for all identifier input errors."""


class InvalidTagError(IdentifierError):
    """The tag byte of an identifier is not acceptable."""


class UnsupportedKindError(InvalidTagError):
    """The kind nibble of a tag exceeds the known identifier kinds."""

    def __init__(self, kind: int):
        super().__init__(f"invalid tag: unsupported tag kind {kind:#x}")
        self.kind = kind


class UnsupportedVersionError(InvalidTagError):
    """The version nibble of a tag exceeds what its kind supports."""

    def __init__(self, kind: int, version: int):
        super().__init__(
            f"invalid tag: unsupported tag version {version} for kind {kind:#x}"
        )
        self.kind = kind
        self.version = version


class WrongKindError(InvalidTagError):
    """The tag is valid but belongs to a different kind than expected."""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"invalid tag: not {_article(expected)} {expected} id")
        self.expected = expected
        self.actual = actual


class MalformedFlagsError(IdentifierError):
    """The flags byte has bits set outside the allowed positions for its tag."""

    def __init__(self, kind: str, flags: int, mask: int):
        super().__init__(
            f"invalid flags: unsupported flags for {kind} id "
            f"(flags={flags:#010b}, disallowed={flags & mask:#010b})"
        )
        self.kind = kind
        self.flags = flags
        self.mask = mask


class UnsupportedFlagError(IdentifierError):
    """A flag was requested for a tag that does not support it."""

    def __init__(self, flag: str, tag: int):
        super().__init__(f"unsupported flag: {flag} is not supported by tag {tag:#04x}")
        self.flag = flag
        self.tag = tag


class InvalidLengthError(IdentifierError):
    """Input does not have the exact length an identifier requires."""

    def __init__(self, expected: int, actual: int, unit: str = "bytes"):
        super().__init__(f"invalid length: expected {expected} {unit}, got {actual}")
        self.expected = expected
        self.actual = actual
        self.unit = unit


class MissingHexPrefixError(IdentifierError):
    """Hex text is missing its mandatory 0x prefix."""

    def __init__(self) -> None:
        super().__init__("missing '0x' prefix")


class HexDecodeError(IdentifierError):
    """
    Hex text could not be decoded.

    Raised for an invalid hex digit (position and char are set to the first
    offending character) or for an odd number of hex digits (position and
    char are None).
    """

    def __init__(self, message: str, position: int | None = None, char: str | None = None):
        super().__init__(message)
        self.position = position
        self.char = char


def _article(word: str) -> str:
    return "an" if word[:1] in "aeiou" else "a"
