"""Unit tests for utils.py functions."""

from __future__ import annotations

from decimal import Decimal

import pytest

from lendpair.errors import InputError
from lendpair.utils import (
    from_base_units,
    is_hex_address,
    keccak256,
    to_base_units,
    to_checksum_address,
)


class TestKeccak256:
    """Keccak-256, not NIST SHA3-256."""

    def test_empty_input(self) -> None:
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_transfer_topic(self) -> None:
        digest = keccak256(b"Transfer(address,address,uint256)").hex()
        assert digest == "ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


class TestChecksumAddress:
    """EIP-55 test vectors."""

    @pytest.mark.parametrize(
        "expected",
        [
            "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
            "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
            "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB",
            "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb",
        ],
    )
    def test_vectors(self, expected: str) -> None:
        assert to_checksum_address(expected.lower()) == expected
        assert to_checksum_address(expected.upper().replace("0X", "0x")) == expected

    def test_rejects_short(self) -> None:
        with pytest.raises(InputError):
            to_checksum_address("0x" + "1" * 39)

    def test_is_hex_address(self) -> None:
        assert is_hex_address("0x" + "a" * 40)
        assert not is_hex_address("0x" + "a" * 39)
        assert not is_hex_address(None)
        assert not is_hex_address(b"\x00" * 20)


class TestToBaseUnits:
    """Tests for to_base_units."""

    def test_whole_units(self) -> None:
        assert to_base_units("1", 6) == 1_000_000

    def test_fraction(self) -> None:
        assert to_base_units("0.01", 6) == 10_000

    def test_decimal_and_int_inputs(self) -> None:
        assert to_base_units(Decimal("2.5"), 18) == 25 * 10 ** 17
        assert to_base_units(3, 0) == 3

    def test_large_amount_is_exact(self) -> None:
        assert to_base_units("79228162514.264337593543950335", 18) == 2 ** 96 - 1

    @pytest.mark.parametrize("amount", ["0.0000001", "-1", "abc", "NaN", "Infinity"])
    def test_rejects(self, amount: str) -> None:
        with pytest.raises(InputError):
            to_base_units(amount, 6)


class TestFromBaseUnits:
    """Tests for from_base_units."""

    def test_trims_trailing_zeros(self) -> None:
        assert from_base_units(1_500_000, 6) == "1.5"

    def test_whole(self) -> None:
        assert from_base_units(10 ** 18, 18) == "1"

    def test_zero(self) -> None:
        assert from_base_units(0, 18) == "0"

    def test_no_decimals(self) -> None:
        assert from_base_units(1000, 0) == "1000"
