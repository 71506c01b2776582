"""Unit tests for schema-driven ABI encoding."""

from __future__ import annotations

import pytest

from lendpair.codec import (
    EncodedBlob,
    ParameterSchema,
    PrimitiveType,
    decode,
    encode,
    values_from_table,
)
from lendpair.errors import EncodingError, InputError
from lendpair.utils import to_checksum_address

ONE = "0x" + "0" * 39 + "1"
USDC = "0xaf88d065e77c8cC2239327C5EDb3A432268e5831"


def _word(value: int) -> bytes:
    return value.to_bytes(32, "big")


def _schema(*tags: str) -> ParameterSchema:
    return ParameterSchema.define("test", [(f"f{i}", tag) for i, tag in enumerate(tags)])


class TestPrimitiveTypeParse:
    """Tests for PrimitiveType.parse."""

    def test_uint_width(self) -> None:
        assert PrimitiveType.parse("uint32") == PrimitiveType("uint", 32)

    def test_bare_uint_is_256(self) -> None:
        assert PrimitiveType.parse("uint").abi_type == "uint256"

    def test_data_location_ignored(self) -> None:
        parsed = PrimitiveType.parse("string memory")
        assert parsed.abi_type == "string"
        assert parsed.is_dynamic

    def test_fixed_bytes(self) -> None:
        parsed = PrimitiveType.parse("bytes32")
        assert parsed == PrimitiveType("bytes", 32)
        assert not parsed.is_dynamic

    def test_dynamic_bytes(self) -> None:
        assert PrimitiveType.parse("bytes").is_dynamic

    @pytest.mark.parametrize("tag", ["uint7", "uint264", "bytes33", "tuple", "address payable", ""])
    def test_rejects_unsupported(self, tag: str) -> None:
        with pytest.raises(InputError):
            PrimitiveType.parse(tag)


class TestScenario:
    """Byte-exact head encoding."""

    def test_uint32_then_address(self) -> None:
        blob = encode(_schema("uint32", "address"), [5000, ONE])
        assert blob.data == _word(5000) + _word(1)
        assert blob.data.hex().startswith("0" * 60 + "1388")

    def test_decimal_strings_accepted(self) -> None:
        schema = _schema("uint32", "address")
        assert encode(schema, ["5000", ONE]).data == encode(schema, [5000, ONE]).data

    def test_dynamic_string_uses_head_offset(self) -> None:
        blob = encode(_schema("string", "uint8"), ["abc", 18])
        assert blob.data[:32] == _word(64)
        assert blob.data[32:64] == _word(18)
        assert blob.data[64:96] == _word(3)
        assert blob.data[96:99] == b"abc"
        assert len(blob) == 128

    def test_deterministic(self) -> None:
        schema = _schema("string", "address", "uint256")
        values = ["Test Thing", USDC, 10 ** 18]
        assert encode(schema, values).data == encode(schema, values).data

    def test_blob_hex(self) -> None:
        blob = encode(_schema("uint8"), [1])
        assert blob.hex() == "0x" + _word(1).hex()
        assert bytes(blob) == _word(1)


class TestBoundaries:
    """Out-of-range and malformed values fail before any bytes exist."""

    @pytest.mark.parametrize("bits", [8, 32, 64, 256])
    def test_uint_max_fits(self, bits: int) -> None:
        blob = encode(_schema(f"uint{bits}"), [2 ** bits - 1])
        assert int.from_bytes(blob.data, "big") == 2 ** bits - 1

    @pytest.mark.parametrize("bits", [8, 32, 64, 256])
    def test_uint_overflow(self, bits: int) -> None:
        with pytest.raises(EncodingError):
            encode(_schema(f"uint{bits}"), [2 ** bits])

    def test_uint_negative(self) -> None:
        with pytest.raises(EncodingError):
            encode(_schema("uint32"), [-1])

    def test_int8_bounds(self) -> None:
        encode(_schema("int8"), [-128])
        encode(_schema("int8"), [127])
        with pytest.raises(EncodingError):
            encode(_schema("int8"), [-129])
        with pytest.raises(EncodingError):
            encode(_schema("int8"), [128])

    def test_address_40_hex_chars(self) -> None:
        encode(_schema("address"), ["0x" + "a" * 40])

    @pytest.mark.parametrize("address", ["0x" + "a" * 39, "0x" + "a" * 41, "a" * 40, "0x" + "g" * 40])
    def test_address_malformed(self, address: str) -> None:
        with pytest.raises(EncodingError):
            encode(_schema("address"), [address])

    @pytest.mark.parametrize("value", [True, 1.5, "1e3", "12abc", None])
    def test_uint_rejects_non_integers(self, value: object) -> None:
        with pytest.raises(EncodingError):
            encode(_schema("uint256"), [value])

    def test_string_rejects_bytes(self) -> None:
        with pytest.raises(EncodingError):
            encode(_schema("string"), [b"abc"])

    def test_fixed_bytes_too_long(self) -> None:
        with pytest.raises(EncodingError):
            encode(_schema("bytes4"), [b"\x00" * 5])

    def test_fixed_bytes_too_short(self) -> None:
        with pytest.raises(EncodingError, match="exactly 4 bytes"):
            encode(_schema("bytes4"), [b"ab"])

    def test_string_rejects_lone_surrogate(self) -> None:
        with pytest.raises(EncodingError, match=r"test\.f0"):
            encode(_schema("string"), ["\ud800"])

    def test_error_names_field(self) -> None:
        schema = ParameterSchema.define("display", [("name", "string"), ("decimals", "uint8")])
        with pytest.raises(EncodingError, match=r"display\.decimals"):
            encode(schema, ["x", 256])


class TestSchemaMismatch:
    """Value count must equal schema length."""

    def test_too_few_values(self) -> None:
        with pytest.raises(InputError):
            encode(_schema("uint32", "address"), [5000])

    def test_too_many_values(self) -> None:
        with pytest.raises(InputError):
            encode(_schema("uint32"), [1, 2])

    def test_mismatch_checked_before_values(self) -> None:
        # The bad address would be an EncodingError; the count check wins
        with pytest.raises(InputError):
            encode(_schema("address", "address"), ["0x1"])

    def test_duplicate_field_names(self) -> None:
        with pytest.raises(InputError):
            ParameterSchema.define("dup", [("a", "uint8"), ("a", "uint8")])


class TestRoundTrip:
    """decode(schema, encode(schema, values)) == values."""

    @pytest.mark.parametrize(
        ("tag", "value"),
        [
            ("uint8", 0),
            ("uint8", 255),
            ("uint64", 90000),
            ("uint256", 2 ** 256 - 1),
            ("int256", -(2 ** 255)),
            ("int32", -5000),
            ("address", to_checksum_address(USDC)),
            ("bool", True),
            ("bool", False),
            ("string", ""),
            ("string", "[0.5 0.2@.875 5-10k] 2 days (.75-.85)"),
            ("string", "pièce ✓"),
            ("bytes", b""),
            ("bytes", bytes(range(70))),
            ("bytes32", b"\x11" * 32),
        ],
    )
    def test_single_value(self, tag: str, value: object) -> None:
        schema = _schema(tag)
        assert decode(schema, encode(schema, [value])) == [value]

    def test_mixed_group(self) -> None:
        schema = _schema("string", "string", "uint8", "address", "bytes")
        values = ["Test Thing", "TSTTHNG", 18, to_checksum_address(USDC), b"\x01\x02"]
        assert decode(schema, encode(schema, values)) == values

    def test_addresses_come_back_checksummed(self) -> None:
        schema = _schema("address")
        decoded = decode(schema, encode(schema, [USDC.lower()]))
        assert decoded == [to_checksum_address(USDC)]

    def test_decode_accepts_raw_bytes(self) -> None:
        schema = _schema("uint32")
        assert decode(schema, _word(7)) == [7]

    def test_decode_truncated(self) -> None:
        with pytest.raises(EncodingError):
            decode(_schema("uint32", "uint32"), _word(1))

    def test_decode_invalid_utf8_string(self) -> None:
        data = _word(32) + _word(1) + b"\xff".ljust(32, b"\x00")
        with pytest.raises(EncodingError):
            decode(_schema("string"), data)


class TestNestedBlobs:
    """Encoded blobs can be passed as bytes arguments."""

    def test_blob_as_bytes_argument(self) -> None:
        inner = encode(_schema("uint8"), [18])
        outer = encode(_schema("bytes"), [inner])
        assert isinstance(outer, EncodedBlob)
        assert decode(outer.schema, outer) == [inner.data]

    def test_hex_string_as_bytes_argument(self) -> None:
        outer = encode(_schema("bytes"), ["0xdeadbeef"])
        assert decode(outer.schema, outer) == [bytes.fromhex("deadbeef")]

    def test_odd_hex_rejected(self) -> None:
        with pytest.raises(EncodingError):
            encode(_schema("bytes"), ["0xabc"])


class TestValuesFromTable:
    """Tests for values_from_table."""

    def test_orders_by_schema(self) -> None:
        schema = ParameterSchema.define("t", [("b", "uint8"), ("a", "uint8")])
        assert values_from_table(schema, {"a": 1, "b": 2}) == [2, 1]

    def test_missing_key(self) -> None:
        schema = ParameterSchema.define("t", [("a", "uint8"), ("b", "uint8")])
        with pytest.raises(InputError, match="Missing"):
            values_from_table(schema, {"a": 1})

    def test_unknown_key(self) -> None:
        schema = ParameterSchema.define("t", [("a", "uint8")])
        with pytest.raises(InputError, match="Unknown"):
            values_from_table(schema, {"a": 1, "z": 2})
