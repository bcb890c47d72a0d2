"""
Kind-less 32-byte addresses.

Address predates the tagged identifier layout: it is an opaque 32-byte value
with no tag, flags or validation. Unlike the identifier models, it accepts
byte input of any length:

    - longer than 32 bytes: only the rightmost 32 bytes are kept
    - shorter than 32 bytes: left-padded with zeros

Text marshaling still requires the 0x prefix and exactly 64 hex characters.
"""

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

from moi_identifiers.core.ids.codec import (
    IDENTIFIER_LENGTH,
    NIL,
    decode_hex,
    encode_hex,
    marshal32,
    unmarshal32,
)

ADDRESS_LENGTH = IDENTIFIER_LENGTH


def fit32(data: bytes) -> bytes:
    """Trim (keeping the rightmost bytes) or left-pad data to 32 bytes."""
    data = bytes(data)
    if len(data) > ADDRESS_LENGTH:
        return data[len(data) - ADDRESS_LENGTH:]
    return bytes(ADDRESS_LENGTH - len(data)) + data


class Address(BaseModel):
    """
    Opaque 32-byte address.

    Example:
        >>> Address.from_bytes(b"\\x01").hex()[-4:]
        '0001'
    """

    value: bytes

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce_value(cls, data: object) -> object:
        if isinstance(data, dict):
            data = data.get("value")
        if isinstance(data, Address):
            return {"value": data.value}
        if isinstance(data, str):
            return {"value": unmarshal32(data)}
        if isinstance(data, (bytes, bytearray, memoryview)):
            return {"value": fit32(bytes(data))}
        raise ValueError(f"Address must be built from hex text or bytes, not {type(data).__name__}")

    @model_serializer
    def _serialize(self) -> str:
        return self.hex()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Address":
        """Build from bytes of any length (trimmed or padded to 32)."""
        return cls.model_construct(value=fit32(data))

    @classmethod
    def from_hex(cls, text: str) -> "Address":
        """
        Build from hex text (0x prefix optional), then trim or pad to 32 bytes.

        Raises:
            HexDecodeError: If the text is not valid hex
        """
        return cls.from_bytes(decode_hex(text))

    @classmethod
    def unmarshal_text(cls, data: bytes | str) -> "Address":
        """
        Build from the 0x-prefixed 64-character text form.

        Raises:
            MissingHexPrefixError: If the 0x prefix is absent
            InvalidLengthError: If the hex body is not 64 characters
            HexDecodeError: If the hex body is malformed
        """
        return cls.model_construct(value=unmarshal32(data))

    def to_bytes(self) -> bytes:
        return self.value

    def hex(self) -> str:
        return encode_hex(self.value)

    def marshal_text(self) -> bytes:
        return marshal32(self.value)

    def is_nil(self) -> bool:
        return self.value == NIL

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Address('{self.hex()}')"


NIL_ADDRESS = Address.model_construct(value=NIL)
