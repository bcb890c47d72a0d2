"""
Identifier generators.

This module provides the primary API for creating new identifiers. The v0
generators lay out an identifier from typed parameters and are valid by
construction; the random generators build throwaway identifiers for tests,
fixtures and tooling.

Generator functions:
    - generate_participant_id_v0: Build a v0 ParticipantID
    - generate_asset_id_v0: Build a v0 AssetID with an asset standard
    - generate_logic_id_v0: Build a v0 LogicID

Random functions:
    - random_fingerprint: 24 random bytes
    - random_participant_id_v0: Random v0 ParticipantID (never systemic)
    - random_asset_id_v0: Random v0 AssetID, each asset flag at 50%
    - random_logic_id_v0: Random v0 LogicID, each logic flag at 50%
    - random_address: Random 32-byte Address

All randomness comes from the secrets module, which is safe to share
across threads.

Example:
    >>> from moi_identifiers.core.ids import ASSET_STATEFUL, generate_asset_id_v0
    >>> asset = generate_asset_id_v0(bytes(range(24)), 0x42, 16, ASSET_STATEFUL)
    >>> asset.hex()[:10]
    '0x10010010'
"""

import secrets

from moi_identifiers.core.ids.address import ADDRESS_LENGTH, Address
from moi_identifiers.core.ids.codec import (
    FINGERPRINT_LENGTH,
    MAX_UINT16,
    MAX_UINT32,
    encode_uint,
    must,
)
from moi_identifiers.core.ids.flags import (
    ASSET_LOGICAL,
    ASSET_STATEFUL,
    LOGIC_AUXILIARY,
    LOGIC_EXTRINSIC,
    LOGIC_INTRINSIC,
    Flag,
)
from moi_identifiers.core.ids.models import (
    AssetID,
    LogicID,
    ParticipantID,
    build_identifier,
)
from moi_identifiers.core.ids.tags import TAG_ASSET_V0, TAG_LOGIC_V0, TAG_PARTICIPANT_V0


def generate_participant_id_v0(fingerprint: bytes, variant: int, *flags: Flag) -> ParticipantID:
    """
    Generate a v0 ParticipantID.

    Layout:
        [tag:1][{systemic}{reserved:7}][reserved:2][fingerprint:24][variant:4]

    Args:
        fingerprint: 24-byte fingerprint
        variant: 32-bit variant number
        *flags: Flags to set (only SYSTEMIC is supported)

    Returns:
        A new ParticipantID

    Raises:
        UnsupportedFlagError: If any flag is not supported by ParticipantID v0
        ValueError: If fingerprint is not 24 bytes or variant exceeds 32 bits
    """
    return build_identifier(ParticipantID, TAG_PARTICIPANT_V0, fingerprint, variant, flags)


def generate_asset_id_v0(
    fingerprint: bytes, variant: int, standard: int, *flags: Flag
) -> AssetID:
    """
    Generate a v0 AssetID.

    Layout:
        [tag:1][{systemic}{reserved:5}{logical}{stateful}][standard:2][fingerprint:24][variant:4]

    Args:
        fingerprint: 24-byte fingerprint
        variant: 32-bit variant number
        standard: 16-bit asset standard
        *flags: Flags to set (SYSTEMIC, ASSET_LOGICAL, ASSET_STATEFUL)

    Returns:
        A new AssetID

    Raises:
        UnsupportedFlagError: If any flag is not supported by AssetID v0
        ValueError: If fingerprint is not 24 bytes, or variant/standard
            does not fit its width
    """
    metadata = encode_uint(standard, 2, "standard")
    return build_identifier(AssetID, TAG_ASSET_V0, fingerprint, variant, flags, metadata)


def generate_logic_id_v0(fingerprint: bytes, variant: int, *flags: Flag) -> LogicID:
    """
    Generate a v0 LogicID.

    Layout:
        [tag:1][{systemic}{reserved:4}{auxiliary}{extrinsic}{intrinsic}][reserved:2][fingerprint:24][variant:4]

    Args:
        fingerprint: 24-byte fingerprint
        variant: 32-bit variant number
        *flags: Flags to set (SYSTEMIC, LOGIC_AUXILIARY, LOGIC_EXTRINSIC,
            LOGIC_INTRINSIC)

    Returns:
        A new LogicID

    Raises:
        UnsupportedFlagError: If any flag is not supported by LogicID v0
        ValueError: If fingerprint is not 24 bytes or variant exceeds 32 bits
    """
    return build_identifier(LogicID, TAG_LOGIC_V0, fingerprint, variant, flags)


# ==============================================================================
# Random generators
# ==============================================================================


def random_fingerprint() -> bytes:
    """Generate a random 24-byte fingerprint."""
    return secrets.token_bytes(FINGERPRINT_LENGTH)


def _coin_flip_flags(*candidates: Flag) -> list[Flag]:
    return [flag for flag in candidates if secrets.randbits(1)]


def random_participant_id_v0() -> ParticipantID:
    """Random v0 ParticipantID with a random fingerprint and variant. Never systemic."""
    return must(
        generate_participant_id_v0,
        random_fingerprint(),
        secrets.randbelow(MAX_UINT32 + 1),
    )


def random_asset_id_v0() -> AssetID:
    """
    Random v0 AssetID with a random fingerprint, variant and standard.

    ASSET_LOGICAL and ASSET_STATEFUL are each set with 50% probability.
    SYSTEMIC is never set.
    """
    return must(
        generate_asset_id_v0,
        random_fingerprint(),
        secrets.randbelow(MAX_UINT32 + 1),
        secrets.randbelow(MAX_UINT16 + 1),
        *_coin_flip_flags(ASSET_LOGICAL, ASSET_STATEFUL),
    )


def random_logic_id_v0() -> LogicID:
    """
    Random v0 LogicID with a random fingerprint and variant.

    LOGIC_INTRINSIC, LOGIC_EXTRINSIC and LOGIC_AUXILIARY are each set with
    50% probability. SYSTEMIC is never set.
    """
    return must(
        generate_logic_id_v0,
        random_fingerprint(),
        secrets.randbelow(MAX_UINT32 + 1),
        *_coin_flip_flags(LOGIC_INTRINSIC, LOGIC_EXTRINSIC, LOGIC_AUXILIARY),
    )


def random_address() -> Address:
    """Random 32-byte Address."""
    return Address.from_bytes(secrets.token_bytes(ADDRESS_LENGTH))
