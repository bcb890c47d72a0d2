"""
Binary layout and text codec for 32-byte identifiers.

Every identifier shares the same slot layout:

    [tag:1][flags:1][metadata:2][fingerprint:24][variant:4]

    - Tag:         byte 0, kind (high nibble) + version (low nibble)
    - Flags:       byte 1, eight kind/version-scoped boolean bits
    - Metadata:    bytes 2-3, kind-specific payload (e.g. asset standard)
    - Fingerprint: bytes 4-27, opaque value distinguishing entities
    - Variant:     bytes 28-31, big-endian uint32 sub-identifier

The text form is "0x" followed by 64 lowercase hex characters. Decoding is
case-insensitive.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from moi_identifiers.core.ids.errors import (
    HexDecodeError,
    IdentifierError,
    InvalidLengthError,
    MissingHexPrefixError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

IDENTIFIER_LENGTH = 32
FINGERPRINT_LENGTH = 24

TAG_OFFSET = 0
FLAGS_OFFSET = 1
METADATA_SLICE = slice(2, 4)
FINGERPRINT_SLICE = slice(4, 28)
VARIANT_SLICE = slice(28, 32)

MAX_UINT16 = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF

HEX_PREFIX = "0x"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# All-zero identifier value
NIL = bytes(IDENTIFIER_LENGTH)


# ==============================================================================
# Slot accessors
# ==============================================================================


def read_tag(raw: bytes) -> int:
    """Return the tag byte."""
    return raw[TAG_OFFSET]


def read_flags(raw: bytes) -> int:
    """Return the flags byte."""
    return raw[FLAGS_OFFSET]


def read_metadata(raw: bytes) -> bytes:
    """Return the 2 metadata bytes."""
    return raw[METADATA_SLICE]


def read_fingerprint(raw: bytes) -> bytes:
    """Return the 24-byte fingerprint."""
    return raw[FINGERPRINT_SLICE]


def read_variant(raw: bytes) -> int:
    """Return the variant as a big-endian uint32."""
    return int.from_bytes(raw[VARIANT_SLICE], "big")


def encode_uint(value: int, size: int, name: str) -> bytes:
    """
    Encode an unsigned integer as big-endian bytes of the given size.

    Raises:
        ValueError: If the value is negative or does not fit in size bytes
    """
    limit = (1 << (8 * size)) - 1
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be between 0 and {limit}, got {value}")
    return value.to_bytes(size, "big")


def assemble(
    tag: int,
    flags: int,
    metadata: bytes,
    fingerprint: bytes,
    variant: int,
) -> bytes:
    """
    Lay out the five identifier slots into a 32-byte value.

    Args:
        tag: Tag byte
        flags: Flags byte
        metadata: 2 bytes of kind-specific metadata
        fingerprint: 24-byte fingerprint
        variant: 32-bit variant number

    Returns:
        The 32-byte identifier value

    Raises:
        ValueError: If any slot does not fit its width
    """
    if len(metadata) != METADATA_SLICE.stop - METADATA_SLICE.start:
        raise ValueError(f"metadata must be 2 bytes, got {len(metadata)}")
    if len(fingerprint) != FINGERPRINT_LENGTH:
        raise ValueError(
            f"fingerprint must be {FINGERPRINT_LENGTH} bytes, got {len(fingerprint)}"
        )

    return (
        encode_uint(tag, 1, "tag")
        + encode_uint(flags, 1, "flags")
        + bytes(metadata)
        + bytes(fingerprint)
        + encode_uint(variant, 4, "variant")
    )


def replace_slots(raw: bytes, *, flags: int | None = None, variant: int | None = None) -> bytes:
    """Return a copy of raw with the flags byte and/or variant replaced."""
    updated = bytearray(raw)
    if flags is not None:
        updated[FLAGS_OFFSET] = flags
    if variant is not None:
        updated[VARIANT_SLICE] = encode_uint(variant, 4, "variant")
    return bytes(updated)


def ensure_length(data: bytes, expected: int = IDENTIFIER_LENGTH) -> bytes:
    """
    Return data as immutable bytes if it has exactly the expected length.

    Raises:
        InvalidLengthError: If the length does not match
    """
    raw = bytes(data)
    if len(raw) != expected:
        raise InvalidLengthError(expected, len(raw))
    return raw


# ==============================================================================
# Hex text codec
# ==============================================================================


def has_0x_prefix(text: str) -> bool:
    """Check whether text starts with the 0x prefix."""
    return text.startswith(HEX_PREFIX)


def trim_0x_prefix(text: str) -> str:
    """Remove the 0x prefix from text if present."""
    return text[len(HEX_PREFIX):] if has_0x_prefix(text) else text


def encode_hex(data: bytes) -> str:
    """Encode bytes as lowercase hex with the 0x prefix."""
    return HEX_PREFIX + bytes(data).hex()


def decode_hex(text: str) -> bytes:
    """
    Decode hex text into bytes. The 0x prefix is optional.

    Args:
        text: Hex string, case-insensitive

    Returns:
        The decoded bytes

    Raises:
        HexDecodeError: If a character is not a hex digit (reports the first
            one and its position in text) or the digit count is odd

    Examples:
        >>> decode_hex("0x0AFF").hex()
        '0aff'
        >>> decode_hex("invalid-hex")
        Traceback (most recent call last):
            ...
        moi_identifiers.core.ids.errors.HexDecodeError: invalid hex character 'i' at position 0
    """
    offset = len(HEX_PREFIX) if has_0x_prefix(text) else 0
    return _decode_digits(text[offset:], offset)


def _decode_digits(digits: str, offset: int) -> bytes:
    for position, char in enumerate(digits):
        if char not in _HEX_DIGITS:
            raise HexDecodeError(
                f"invalid hex character {char!r} at position {position + offset}",
                position=position + offset,
                char=char,
            )

    if len(digits) % 2:
        raise HexDecodeError(f"odd length hex string ({len(digits)} digits)")

    return bytes.fromhex(digits)


def marshal32(data: bytes) -> bytes:
    """Marshal a 32-byte value to its UTF-8 text form (0x + 64 hex chars)."""
    return encode_hex(data).encode("ascii")


def unmarshal32(data: bytes | str) -> bytes:
    """
    Unmarshal the text form of a 32-byte value.

    Unlike decode_hex, the 0x prefix is mandatory and exactly 64 hex
    characters must follow it.

    Raises:
        MissingHexPrefixError: If the 0x prefix is absent
        InvalidLengthError: If the hex body is not 64 characters
        HexDecodeError: If the hex body is malformed
    """
    text = data.decode("ascii", errors="replace") if isinstance(data, (bytes, bytearray)) else data

    if not has_0x_prefix(text):
        raise MissingHexPrefixError()

    body = trim_0x_prefix(text)
    if len(body) != IDENTIFIER_LENGTH * 2:
        raise InvalidLengthError(IDENTIFIER_LENGTH * 2, len(body), unit="hex characters")

    return _decode_digits(body, len(HEX_PREFIX))


# ==============================================================================
# Assertion helper
# ==============================================================================


def must(factory: Callable[..., T], *args: object, **kwargs: object) -> T:
    """
    Call an identifier constructor that is known not to fail.

    Only for inputs already proven valid (constants, freshly generated
    values). Never use on external input.

    Raises:
        RuntimeError: If the constructor raises an IdentifierError

    Example:
        >>> from moi_identifiers.core.ids import AssetID
        >>> tag_only = bytes([0x10]) + bytes(31)
        >>> must(AssetID.from_bytes, tag_only).standard
        0
    """
    try:
        return factory(*args, **kwargs)
    except IdentifierError as e:
        logger.error("must(%s) failed: %s", getattr(factory, "__qualname__", factory), e)
        raise RuntimeError(f"identifier construction must not fail: {e}") from e
