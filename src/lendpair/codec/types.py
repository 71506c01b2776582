"""
ABI primitive types.

A PrimitiveType is parsed from a Solidity-style tag ("uint32", "address",
"string memory") and knows how to coerce a human-authored value (often a
decimal string copied from a deployment table) into the Python value
eth-abi expects for that type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import EncodingError, InputError
from ..utils import is_hex_address, to_checksum_address

_INT_TAG = re.compile(r"^(u?int)(\d*)$")
_FIXED_BYTES_TAG = re.compile(r"^bytes(\d+)$")
_DECIMAL = re.compile(r"^-?\d+$")
_HEX = re.compile(r"^0x([0-9a-fA-F]{2})*$")

# Solidity data locations are meaningful in signatures, not in encoding
_DATA_LOCATIONS = {"memory", "calldata", "storage"}


@dataclass(frozen=True)
class PrimitiveType:
    """
    One ABI primitive.

    Attributes:
        kind: "uint", "int", "address", "bool", "string" or "bytes"
        size: bit width for uint/int, byte length for fixed bytesN,
              None for the rest
    """
    kind: str
    size: Optional[int] = None

    @classmethod
    def parse(cls, tag: str) -> "PrimitiveType":
        """
        Parse a Solidity type tag.

        Raises:
            InputError: If the tag is not a supported primitive
        """
        parts = tag.split()
        if not parts or any(p not in _DATA_LOCATIONS for p in parts[1:]):
            raise InputError(f"Unsupported ABI type tag: {tag!r}")
        base = parts[0]

        if base in ("address", "bool", "string", "bytes"):
            return cls(base)

        match = _INT_TAG.match(base)
        if match:
            bits = int(match.group(2) or 256)
            if bits < 8 or bits > 256 or bits % 8:
                raise InputError(f"Invalid integer width in {tag!r}")
            return cls(match.group(1), bits)

        match = _FIXED_BYTES_TAG.match(base)
        if match:
            length = int(match.group(1))
            if not 1 <= length <= 32:
                raise InputError(f"Invalid fixed bytes length in {tag!r}")
            return cls("bytes", length)

        raise InputError(f"Unsupported ABI type tag: {tag!r}")

    @property
    def abi_type(self) -> str:
        if self.size is None:
            return self.kind
        return f"{self.kind}{self.size}"

    @property
    def is_dynamic(self) -> bool:
        return self.kind == "string" or (self.kind == "bytes" and self.size is None)

    def bounds(self) -> tuple[int, int]:
        """Inclusive (min, max) for integer types."""
        if self.kind == "uint":
            return 0, 2 ** self.size - 1
        if self.kind == "int":
            half = 2 ** (self.size - 1)
            return -half, half - 1
        raise TypeError(f"{self.abi_type} has no integer bounds")

    def coerce(self, value: Any) -> Any:
        """
        Convert *value* into the form eth-abi encodes for this type.

        Raises:
            EncodingError: If the value cannot be represented
        """
        if self.kind in ("uint", "int"):
            return self._coerce_int(value)
        if self.kind == "address":
            return self._coerce_address(value)
        if self.kind == "bool":
            if not isinstance(value, bool):
                raise EncodingError(f"bool expected, got {value!r}")
            return value
        if self.kind == "string":
            if not isinstance(value, str):
                raise EncodingError(f"string expected, got {type(value).__name__}")
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise EncodingError(f"string is not valid UTF-8: {exc.reason}") from None
            return value
        return self._coerce_bytes(value)

    def _coerce_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise EncodingError(f"{self.abi_type} expected, got bool")
        if isinstance(value, str):
            text = value.strip()
            if not _DECIMAL.match(text):
                raise EncodingError(f"{self.abi_type} expected, got {value!r}")
            value = int(text)
        if not isinstance(value, int):
            raise EncodingError(
                f"{self.abi_type} expected, got {type(value).__name__}"
            )
        low, high = self.bounds()
        if not low <= value <= high:
            raise EncodingError(
                f"{value} does not fit in {self.abi_type} (range {low}..{high})"
            )
        return value

    def _coerce_address(self, value: Any) -> str:
        if isinstance(value, (bytes, bytearray)) and len(value) == 20:
            value = "0x" + bytes(value).hex()
        if not is_hex_address(value):
            raise EncodingError(
                f"address must be 0x followed by 40 hex characters, got {value!r}"
            )
        return to_checksum_address(value)

    def _coerce_bytes(self, value: Any) -> bytes:
        if isinstance(value, str):
            if not _HEX.match(value):
                raise EncodingError(f"{self.abi_type} expected 0x hex, got {value!r}")
            raw = bytes.fromhex(value[2:])
        elif isinstance(value, (bytes, bytearray)):
            raw = bytes(value)
        elif hasattr(value, "__bytes__"):
            raw = bytes(value)
        else:
            raise EncodingError(
                f"{self.abi_type} expected, got {type(value).__name__}"
            )
        if self.size is not None and len(raw) != self.size:
            raise EncodingError(
                f"{self.abi_type} needs exactly {self.size} bytes, got {len(raw)}"
            )
        return raw
