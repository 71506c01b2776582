from __future__ import annotations

import re
from decimal import Context, Decimal, InvalidOperation

from eth_hash.auto import keccak

from .errors import InputError

_HEX_ADDRESS = re.compile(r"^0x[0-9a-fA-F]{40}$")
# Wide enough for any uint256 amount
_AMOUNT_CONTEXT = Context(prec=80)


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def is_hex_address(value: object) -> bool:
    return isinstance(value, str) and bool(_HEX_ADDRESS.match(value))


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.
    """
    if not is_hex_address(address):
        raise InputError(f"Not a 20-byte hex address: {address!r}")
    addr = address[2:].lower()
    addr_hash = keccak256(addr.encode("utf-8")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result


def to_base_units(amount: str | int | Decimal, decimals: int) -> int:
    """Scale a human amount ("0.01") to integer base units of a token.

    Raises InputError if the amount is negative, not a number, or has
    more fractional digits than the token supports.
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InputError(f"Invalid amount: {amount!r}") from None
    if not value.is_finite() or value < 0:
        raise InputError(f"Invalid amount: {amount!r}")
    scaled = value.scaleb(decimals, context=_AMOUNT_CONTEXT)
    if scaled != scaled.to_integral_value():
        raise InputError(
            f"Amount {amount} has more than {decimals} decimal places"
        )
    return int(scaled)


def from_base_units(value: int, decimals: int) -> str:
    """Render integer base units as a plain decimal string."""
    quantized = Decimal(value).scaleb(-decimals, context=_AMOUNT_CONTEXT)
    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
