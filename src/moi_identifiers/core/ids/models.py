"""
Identifier models for protocol accounts.

These Pydantic models provide immutable, type-safe representations of the
32-byte identifiers used to name participant, asset and logic accounts:

    [tag:1][flags:1][metadata:2][fingerprint:24][variant:4]

Models:
    - ParticipantID: Participant account identifier
    - AssetID: Asset account identifier (metadata holds the asset standard)
    - LogicID: Logic account identifier
    - Identifier: Kind-erased identifier every specific type converts to

Kind-specific models validate on construction (tag kind, tag version, and
flags allowed for that tag). Each is a distinct type, so a ParticipantID is
never equal to an AssetID even if their bytes match.

Example:
    >>> asset = AssetID.from_hex(
    ...     "0x1001001001020304050607081112131415161718212223242526272800000042"
    ... )
    >>> asset.standard, asset.variant
    (16, 66)
    >>> asset.flag(ASSET_STATEFUL)
    True
    >>> asset.as_identifier().as_asset_id() == asset
    True
"""

import logging
from collections.abc import Iterable
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from moi_identifiers.core.ids.codec import (
    NIL,
    assemble,
    decode_hex,
    encode_hex,
    encode_uint,
    ensure_length,
    marshal32,
    read_fingerprint,
    read_flags,
    read_metadata,
    read_tag,
    read_variant,
    replace_slots,
    unmarshal32,
)
from moi_identifiers.core.ids.errors import (
    IdentifierError,
    MalformedFlagsError,
    UnsupportedFlagError,
    WrongKindError,
)
from moi_identifiers.core.ids.flags import Flag, flag_mask, get_flag, set_flag
from moi_identifiers.core.ids.tags import IdentifierKind, IdentifierTag

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound="IdentifierModel")


class IdentifierModel(BaseModel):
    """
    Base for every 32-byte identifier value.

    Holds the raw bytes and the accessors shared by all kinds. Subclasses
    tighten validation by overriding _check_layout().

    Serializes to its hex text form and validates from hex text, bytes, or
    another identifier model, so it can be embedded in other Pydantic models.
    """

    value: bytes

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_value(cls, data: Any) -> Any:
        """Accept hex text, raw bytes, or another identifier model."""
        if isinstance(data, dict):
            data = data.get("value")
        return {"value": cls._checked(cls._to_raw(data))}

    @model_serializer
    def _serialize(self) -> str:
        return self.hex()

    @classmethod
    def _to_raw(cls, data: Any) -> bytes:
        if isinstance(data, IdentifierModel):
            return data.value
        if isinstance(data, str):
            return unmarshal32(data)
        if isinstance(data, (bytes, bytearray, memoryview)):
            return bytes(data)
        raise ValueError(
            f"{cls.__name__} must be built from hex text or bytes, not {type(data).__name__}"
        )

    @classmethod
    def _checked(cls, data: bytes) -> bytes:
        raw = ensure_length(data)
        try:
            cls._check_layout(raw)
        except IdentifierError as e:
            logger.debug("Rejected %s %s: %s", cls.__name__, raw.hex(), e)
            raise
        return raw

    @classmethod
    def _check_layout(cls, raw: bytes) -> None:
        """Validate a 32-byte value for this type. No-op for the generic type."""

    # --------------------------------------------------------------------------
    # Constructors
    # --------------------------------------------------------------------------

    @classmethod
    def from_bytes(cls: type[_M], data: bytes) -> _M:
        """
        Build from exactly 32 bytes, validating for this type.

        Raises:
            InvalidLengthError: If data is not 32 bytes long
            InvalidTagError: If the tag is unsupported or of the wrong kind
            MalformedFlagsError: If disallowed flag bits are set
        """
        return cls.model_construct(value=cls._checked(data))

    @classmethod
    def from_hex(cls: type[_M], text: str) -> _M:
        """
        Build from hex text (0x prefix optional, case-insensitive).

        Raises:
            HexDecodeError: If the text is not valid hex
            plus everything from_bytes() raises
        """
        return cls.from_bytes(decode_hex(text))

    @classmethod
    def unmarshal_text(cls: type[_M], data: bytes | str) -> _M:
        """
        Build from the text form produced by marshal_text().

        The 0x prefix is required and exactly 64 hex characters must follow.
        The decoded value is validated like from_bytes().

        Raises:
            MissingHexPrefixError: If the 0x prefix is absent
            InvalidLengthError: If the hex body is not 64 characters
            HexDecodeError: If the hex body is malformed
        """
        return cls.from_bytes(unmarshal32(data))

    # --------------------------------------------------------------------------
    # Encodings
    # --------------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """The 32-byte value."""
        return self.value

    def hex(self) -> str:
        """Hex text with the 0x prefix."""
        return encode_hex(self.value)

    def marshal_text(self) -> bytes:
        """Text form as bytes: 0x followed by 64 lowercase hex characters."""
        return marshal32(self.value)

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.hex()}')"

    # --------------------------------------------------------------------------
    # Accessors
    # --------------------------------------------------------------------------

    @property
    def tag(self) -> IdentifierTag:
        """Tag byte (kind + version)."""
        return IdentifierTag(read_tag(self.value))

    @property
    def flags(self) -> int:
        """Raw flags byte."""
        return read_flags(self.value)

    @property
    def fingerprint(self) -> bytes:
        """24-byte fingerprint."""
        return read_fingerprint(self.value)

    @property
    def variant(self) -> int:
        """32-bit variant number."""
        return read_variant(self.value)

    def is_variant(self) -> bool:
        """True if the variant number is non-zero."""
        return self.variant != 0

    def flag(self, flag: Flag) -> bool:
        """
        Whether a flag is set.

        Returns False for flags the tag does not support, regardless of the
        actual bit value.
        """
        if not flag.supports(self.tag):
            return False
        return get_flag(self.flags, flag.index)

    def derive_variant(
        self: _M,
        variant: int,
        set_flags: Iterable[Flag] = (),
        unset_flags: Iterable[Flag] = (),
    ) -> _M:
        """
        Derive a new identifier with another variant and adjusted flags.

        The tag, metadata and fingerprint are preserved. Flags in set_flags
        are set, then flags in unset_flags are cleared, in the order given.
        The source identifier is never modified.

        Args:
            variant: New 32-bit variant number
            set_flags: Flags to set on the derived identifier
            unset_flags: Flags to clear on the derived identifier

        Returns:
            A new identifier of the same type

        Raises:
            UnsupportedFlagError: If any flag is not supported by the tag
            ValueError: If variant does not fit in 32 bits
        """
        encode_uint(variant, 4, "variant")
        tag = self.tag
        flags = self.flags

        for flag in set_flags:
            if not flag.supports(tag):
                raise UnsupportedFlagError(flag.name, tag)
            flags = set_flag(flags, flag.index, True)

        for flag in unset_flags:
            if not flag.supports(tag):
                raise UnsupportedFlagError(flag.name, tag)
            flags = set_flag(flags, flag.index, False)

        derived = replace_slots(self.value, flags=flags, variant=variant)
        logger.debug("Derived %s -> %s", self.hex(), encode_hex(derived))
        return type(self).model_construct(value=derived)

    def as_identifier(self) -> "Identifier":
        """Reinterpret as a generic Identifier. Never fails."""
        return Identifier.model_construct(value=self.value)


class KindIdentifier(IdentifierModel):
    """
    Identifier bound to a single kind.

    Validation checks, in order: the tag is supported, the tag is of this
    kind, and no flag bit outside flag_mask(tag) is set.
    """

    KIND: ClassVar[IdentifierKind]

    @classmethod
    def _check_layout(cls, raw: bytes) -> None:
        validate_layout(raw, cls.KIND)

    @classmethod
    def from_identifier(cls: type[_M], identifier: IdentifierModel) -> _M:
        """Convert a generic Identifier, validating it for this kind."""
        return cls.from_bytes(identifier.value)

    def check(self) -> None:
        """Re-run validation on the held bytes."""
        self._check_layout(self.value)


class ParticipantID(KindIdentifier):
    """
    Participant account identifier.

    Flags: SYSTEMIC (bit 7). Metadata is unused as of v0.
    """

    KIND: ClassVar[IdentifierKind] = IdentifierKind.PARTICIPANT


class AssetID(KindIdentifier):
    """
    Asset account identifier.

    Flags: SYSTEMIC (bit 7), ASSET_LOGICAL (bit 1), ASSET_STATEFUL (bit 0).
    Metadata holds the 16-bit asset standard.
    """

    KIND: ClassVar[IdentifierKind] = IdentifierKind.ASSET

    @property
    def standard(self) -> int:
        """16-bit asset standard from bytes 2-3."""
        return int.from_bytes(read_metadata(self.value), "big")


class LogicID(KindIdentifier):
    """
    Logic account identifier.

    Flags: SYSTEMIC (bit 7), LOGIC_AUXILIARY (bit 2), LOGIC_EXTRINSIC (bit 1),
    LOGIC_INTRINSIC (bit 0). Metadata is unused as of v0.
    """

    KIND: ClassVar[IdentifierKind] = IdentifierKind.LOGIC


class Identifier(IdentifierModel):
    """
    Kind-erased 32-byte identifier.

    Construction only checks the length: any 32-byte value is a valid
    Identifier, including ones with unknown tags or malformed flags. Use the
    as_*() methods to obtain a validated kind-specific model.
    """

    @property
    def metadata(self) -> bytes:
        """The 2 kind-specific metadata bytes (bytes 2-3)."""
        return read_metadata(self.value)

    def is_nil(self) -> bool:
        """True for the all-zero identifier."""
        return self.value == NIL

    def as_participant_id(self) -> ParticipantID:
        """Validate as a ParticipantID."""
        return ParticipantID.from_bytes(self.value)

    def as_asset_id(self) -> AssetID:
        """Validate as an AssetID."""
        return AssetID.from_bytes(self.value)

    def as_logic_id(self) -> LogicID:
        """Validate as a LogicID."""
        return LogicID.from_bytes(self.value)

    def as_kind(self) -> KindIdentifier:
        """
        Validate as whichever kind-specific model the tag names.

        Raises:
            InvalidTagError: If the tag is unsupported
            MalformedFlagsError: If disallowed flag bits are set
        """
        tag = self.tag
        tag.validate()
        return KIND_MODELS[IdentifierKind(tag.kind)].from_bytes(self.value)


KIND_MODELS: dict[IdentifierKind, type[KindIdentifier]] = {
    IdentifierKind.PARTICIPANT: ParticipantID,
    IdentifierKind.ASSET: AssetID,
    IdentifierKind.LOGIC: LogicID,
}

NIL_IDENTIFIER = Identifier.model_construct(value=NIL)


def validate_layout(raw: bytes, kind: IdentifierKind) -> None:
    """
    Validate a 32-byte value as an identifier of the given kind.

    Raises:
        UnsupportedKindError: If the tag's kind is unknown
        UnsupportedVersionError: If the tag's version is unsupported
        WrongKindError: If the tag is valid but of another kind
        MalformedFlagsError: If flag bits outside the allowed mask are set
    """
    tag = IdentifierTag(read_tag(raw))
    tag.validate()

    actual = IdentifierKind(tag.kind)
    if actual != kind:
        raise WrongKindError(expected=kind.label, actual=actual.label)

    flags = read_flags(raw)
    mask = flag_mask(tag)
    if flags & mask:
        raise MalformedFlagsError(kind.label, flags, mask)


def build_identifier(
    model: type[_M],
    tag: IdentifierTag,
    fingerprint: bytes,
    variant: int,
    flags: Iterable[Flag] = (),
    metadata: bytes = b"\x00\x00",
) -> _M:
    """
    Lay out a new identifier for a tag, setting the given flags.

    All flags are checked before anything is built, so an unsupported flag
    never yields a partially flagged value.

    Raises:
        UnsupportedFlagError: If any flag is not supported by tag
        ValueError: If fingerprint is not 24 bytes or variant exceeds 32 bits
    """
    flag_byte = 0
    for flag in flags:
        if not flag.supports(tag):
            raise UnsupportedFlagError(flag.name, tag)
        flag_byte = set_flag(flag_byte, flag.index, True)

    raw = assemble(tag, flag_byte, metadata, fingerprint, variant)
    return model.model_construct(value=raw)
