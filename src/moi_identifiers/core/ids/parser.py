"""
Identifier parser and validator.

This module turns hex text or raw bytes into the typed identifier model that
the tag names, without the caller knowing the kind in advance:

- 0x00...: ParticipantID
- 0x10...: AssetID
- 0x20...: LogicID

Public API:
    - parse_identifier: Parse into the matching typed model
    - is_valid_identifier: Check if input is a valid identifier of any kind
    - get_identifier_kind: Determine the kind without full validation
"""

from moi_identifiers.core.ids.codec import decode_hex, ensure_length, read_tag
from moi_identifiers.core.ids.errors import IdentifierError
from moi_identifiers.core.ids.models import Identifier, KindIdentifier
from moi_identifiers.core.ids.tags import IdentifierKind, IdentifierTag

IdentifierInput = str | bytes | Identifier


def _to_identifier(data: IdentifierInput) -> Identifier:
    if isinstance(data, Identifier):
        return data
    if isinstance(data, str):
        return Identifier.from_hex(data)
    return Identifier.from_bytes(data)


def parse_identifier(data: IdentifierInput) -> KindIdentifier:
    """
    Parse input into its typed identifier model.

    Hex text may omit the 0x prefix. The model is chosen from the tag's kind
    and fully validated.

    Args:
        data: Hex text, 32 raw bytes, or a generic Identifier

    Returns:
        A ParticipantID, AssetID or LogicID

    Raises:
        IdentifierError: If the input is not a valid identifier

    Examples:
        >>> parsed = parse_identifier(
        ...     "0x1001001001020304050607081112131415161718212223242526272800000042"
        ... )
        >>> type(parsed).__name__
        'AssetID'
        >>> parse_identifier("0xf0" + "00" * 31)
        Traceback (most recent call last):
            ...
        moi_identifiers.core.ids.errors.UnsupportedKindError: invalid tag: unsupported tag kind 0xf
    """
    return _to_identifier(data).as_kind()


def is_valid_identifier(data: IdentifierInput) -> bool:
    """
    Check if input is a valid identifier of any kind.

    Examples:
        >>> is_valid_identifier("0x20" + "00" * 31)
        True
        >>> is_valid_identifier("0x20ff" + "00" * 30)
        False
        >>> is_valid_identifier("not hex")
        False
    """
    try:
        parse_identifier(data)
    except IdentifierError:
        return False
    return True


def get_identifier_kind(data: IdentifierInput) -> IdentifierKind | None:
    """
    Determine the kind named by the tag, without validating flags.

    Returns None if the input is not 32 bytes of hex/bytes or the tag is not
    supported.

    Examples:
        >>> get_identifier_kind("0x10" + "00" * 31)
        <IdentifierKind.ASSET: 1>
        >>> get_identifier_kind("0x01" + "00" * 31) is None
        True
    """
    try:
        raw = decode_hex(data) if isinstance(data, str) else bytes(data)
        tag = IdentifierTag(read_tag(ensure_length(raw)))
        tag.validate()
    except IdentifierError:
        return None
    return IdentifierKind(tag.kind)
