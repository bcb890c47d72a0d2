"""
32-byte identifiers for protocol accounts.

This package provides type-safe models and utilities for the identifiers that
name participant, asset and logic accounts.

Layout:
    [tag:1][flags:1][metadata:2][fingerprint:24][variant:4]

Public API:
    Models:
        - ParticipantID: Participant identifier (tag 0x00)
        - AssetID: Asset identifier with a 16-bit standard (tag 0x10)
        - LogicID: Logic identifier (tag 0x20)
        - Identifier: Kind-erased identifier
        - Address: Kind-less 32-byte address with lenient length handling

    Tags and flags:
        - IdentifierKind, IdentifierTag, TAG_*_V0
        - Flag, SYSTEMIC, ASSET_*, LOGIC_*, flag_mask, flags_for, lookup_flag

    Parser functions:
        - parse_identifier: Parse into the typed model the tag names
        - is_valid_identifier: Check if input is a valid identifier
        - get_identifier_kind: Determine kind without full validation

    Generator functions:
        - generate_participant_id_v0, generate_asset_id_v0, generate_logic_id_v0
        - random_fingerprint, random_participant_id_v0, random_asset_id_v0,
          random_logic_id_v0, random_address

    Errors:
        - IdentifierError and its subclasses

Example:
    >>> from moi_identifiers.core.ids import (
    ...     ASSET_STATEFUL, SYSTEMIC, generate_asset_id_v0, parse_identifier,
    ... )
    >>> asset = generate_asset_id_v0(bytes(24), 1, 16, ASSET_STATEFUL)
    >>> parse_identifier(asset.hex()) == asset
    True
    >>> asset.derive_variant(2, set_flags=[SYSTEMIC]).flag(SYSTEMIC)
    True
"""

from moi_identifiers.core.ids.address import NIL_ADDRESS, Address
from moi_identifiers.core.ids.codec import NIL, decode_hex, encode_hex, must
from moi_identifiers.core.ids.errors import (
    HexDecodeError,
    IdentifierError,
    InvalidLengthError,
    InvalidTagError,
    MalformedFlagsError,
    MissingHexPrefixError,
    UnsupportedFlagError,
    UnsupportedKindError,
    UnsupportedVersionError,
    WrongKindError,
)
from moi_identifiers.core.ids.flags import (
    ALL_FLAGS,
    ASSET_LOGICAL,
    ASSET_STATEFUL,
    LOGIC_AUXILIARY,
    LOGIC_EXTRINSIC,
    LOGIC_INTRINSIC,
    SYSTEMIC,
    Flag,
    flag_mask,
    flags_for,
    lookup_flag,
)
from moi_identifiers.core.ids.generator import (
    generate_asset_id_v0,
    generate_logic_id_v0,
    generate_participant_id_v0,
    random_address,
    random_asset_id_v0,
    random_fingerprint,
    random_logic_id_v0,
    random_participant_id_v0,
)
from moi_identifiers.core.ids.models import (
    NIL_IDENTIFIER,
    AssetID,
    Identifier,
    KindIdentifier,
    LogicID,
    ParticipantID,
)
from moi_identifiers.core.ids.parser import (
    get_identifier_kind,
    is_valid_identifier,
    parse_identifier,
)
from moi_identifiers.core.ids.tags import (
    TAG_ASSET_V0,
    TAG_LOGIC_V0,
    TAG_PARTICIPANT_V0,
    IdentifierKind,
    IdentifierTag,
)

__all__ = [
    # Models
    "ParticipantID",
    "AssetID",
    "LogicID",
    "Identifier",
    "KindIdentifier",
    "Address",
    "NIL",
    "NIL_IDENTIFIER",
    "NIL_ADDRESS",
    # Tags
    "IdentifierKind",
    "IdentifierTag",
    "TAG_PARTICIPANT_V0",
    "TAG_ASSET_V0",
    "TAG_LOGIC_V0",
    # Flags
    "Flag",
    "SYSTEMIC",
    "ASSET_STATEFUL",
    "ASSET_LOGICAL",
    "LOGIC_INTRINSIC",
    "LOGIC_EXTRINSIC",
    "LOGIC_AUXILIARY",
    "ALL_FLAGS",
    "flag_mask",
    "flags_for",
    "lookup_flag",
    # Parser functions
    "parse_identifier",
    "is_valid_identifier",
    "get_identifier_kind",
    # Generator functions
    "generate_participant_id_v0",
    "generate_asset_id_v0",
    "generate_logic_id_v0",
    "random_fingerprint",
    "random_participant_id_v0",
    "random_asset_id_v0",
    "random_logic_id_v0",
    "random_address",
    # Codec helpers
    "decode_hex",
    "encode_hex",
    "must",
    # Errors
    "IdentifierError",
    "InvalidTagError",
    "UnsupportedKindError",
    "UnsupportedVersionError",
    "WrongKindError",
    "MalformedFlagsError",
    "UnsupportedFlagError",
    "InvalidLengthError",
    "MissingHexPrefixError",
    "HexDecodeError",
]
