"""
Tests for the binary layout and hex text codec.
"""

import pytest

from moi_identifiers.core.ids import AssetID, HexDecodeError, InvalidLengthError, MissingHexPrefixError
from moi_identifiers.core.ids.codec import (
    NIL,
    assemble,
    decode_hex,
    encode_hex,
    encode_uint,
    ensure_length,
    has_0x_prefix,
    marshal32,
    must,
    read_fingerprint,
    read_flags,
    read_metadata,
    read_tag,
    read_variant,
    replace_slots,
    trim_0x_prefix,
    unmarshal32,
)


class TestSlots:
    """Tests for slot accessors and layout assembly."""

    def test_read_slots(self, asset_hex: str, fingerprint: bytes) -> None:
        """Each slot is read from its fixed offset."""
        raw = bytes.fromhex(asset_hex[2:])
        assert read_tag(raw) == 0x10
        assert read_flags(raw) == 0b00000001
        assert read_metadata(raw) == b"\x00\x10"
        assert read_fingerprint(raw) == fingerprint
        assert read_variant(raw) == 0x42

    def test_assemble_matches_known_layout(self, asset_hex: str, fingerprint: bytes) -> None:
        """assemble() lays slots out as tag, flags, metadata, fingerprint, variant."""
        raw = assemble(0x10, 0x01, b"\x00\x10", fingerprint, 0x42)
        assert encode_hex(raw) == asset_hex

    def test_assemble_rejects_short_fingerprint(self) -> None:
        """Fingerprints must be exactly 24 bytes."""
        with pytest.raises(ValueError, match="fingerprint must be 24 bytes"):
            assemble(0x10, 0, b"\x00\x00", bytes(23), 0)

    def test_assemble_rejects_wide_metadata(self, fingerprint: bytes) -> None:
        """Metadata must be exactly 2 bytes."""
        with pytest.raises(ValueError, match="metadata must be 2 bytes"):
            assemble(0x10, 0, b"\x00\x00\x00", fingerprint, 0)

    def test_encode_uint_bounds(self) -> None:
        """encode_uint rejects negatives and values wider than the slot."""
        assert encode_uint(0xFFFFFFFF, 4, "variant") == b"\xff\xff\xff\xff"
        with pytest.raises(ValueError, match="variant must be between 0 and 4294967295"):
            encode_uint(0x1_0000_0000, 4, "variant")
        with pytest.raises(ValueError):
            encode_uint(-1, 2, "standard")

    def test_replace_slots_copies(self, asset_hex: str) -> None:
        """replace_slots returns a new value and leaves the input untouched."""
        raw = bytes.fromhex(asset_hex[2:])
        updated = replace_slots(raw, flags=0x80, variant=9)
        assert read_flags(updated) == 0x80
        assert read_variant(updated) == 9
        assert read_fingerprint(updated) == read_fingerprint(raw)
        assert read_flags(raw) == 0x01

    @pytest.mark.parametrize("length", [0, 31, 33])
    def test_ensure_length(self, length: int) -> None:
        """Anything other than 32 bytes is rejected."""
        with pytest.raises(InvalidLengthError) as exc_info:
            ensure_length(bytes(length))
        assert exc_info.value.expected == 32
        assert exc_info.value.actual == length

    def test_nil_is_32_zero_bytes(self) -> None:
        assert NIL == bytes(32)


class TestHex:
    """Tests for hex encoding and decoding."""

    def test_prefix_helpers(self) -> None:
        assert has_0x_prefix("0xabcd")
        assert not has_0x_prefix("abcd")
        assert trim_0x_prefix("0xabcd") == "abcd"
        assert trim_0x_prefix("abcd") == "abcd"

    def test_encode_is_lowercase(self) -> None:
        assert encode_hex(b"\xab\xcd") == "0xabcd"

    def test_decode_is_case_insensitive(self) -> None:
        assert decode_hex("0xABcd") == b"\xab\xcd"
        assert decode_hex("ABCD") == b"\xab\xcd"

    def test_decode_reports_first_invalid_character(self) -> None:
        """The error names the first bad character and its position."""
        with pytest.raises(HexDecodeError) as exc_info:
            decode_hex("invalid-hex")
        assert exc_info.value.char == "i"
        assert exc_info.value.position == 0

    def test_decode_position_counts_prefix(self) -> None:
        """Positions are reported relative to the full input text."""
        with pytest.raises(HexDecodeError) as exc_info:
            decode_hex("0xabzz")
        assert exc_info.value.position == 4
        assert exc_info.value.char == "z"

    def test_decode_odd_length(self) -> None:
        with pytest.raises(HexDecodeError, match="odd length"):
            decode_hex("0xf")


class TestText:
    """Tests for the mandatory-prefix text form."""

    def test_marshal(self, asset_hex: str) -> None:
        raw = bytes.fromhex(asset_hex[2:])
        assert marshal32(raw) == asset_hex.encode()

    def test_unmarshal_accepts_bytes_and_str(self, asset_hex: str) -> None:
        raw = bytes.fromhex(asset_hex[2:])
        assert unmarshal32(asset_hex) == raw
        assert unmarshal32(asset_hex.encode()) == raw

    def test_unmarshal_requires_prefix(self, asset_hex: str) -> None:
        with pytest.raises(MissingHexPrefixError):
            unmarshal32(asset_hex[2:])

    def test_unmarshal_requires_64_characters(self, asset_hex: str) -> None:
        with pytest.raises(InvalidLengthError) as exc_info:
            unmarshal32(asset_hex[:-2])
        assert exc_info.value.unit == "hex characters"
        assert exc_info.value.actual == 62

    def test_unmarshal_rejects_bad_digit(self, asset_hex: str) -> None:
        with pytest.raises(HexDecodeError) as exc_info:
            unmarshal32(asset_hex[:-1] + "g")
        assert exc_info.value.position == 65


class TestMust:
    """Tests for the must() assertion helper."""

    def test_returns_value(self, asset_hex: str) -> None:
        asset = must(AssetID.from_hex, asset_hex)
        assert asset.hex() == asset_hex

    def test_converts_identifier_error(self) -> None:
        """A failing constructor is a contract violation, not an input error."""
        with pytest.raises(RuntimeError, match="must not fail") as exc_info:
            must(AssetID.from_bytes, bytes(32))
        assert isinstance(exc_info.value.__cause__, ValueError)
