"""
Schema-driven ABI encoding.

A ParameterSchema declares an ordered list of named primitive fields.
``encode`` checks a value list against it and produces the standard
Solidity head/tail layout through eth-abi; ``decode`` reverses it.
Encoding is pure: the same schema and values always give the same bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from eth_abi.exceptions import EncodingError as AbiEncodingError

from ..errors import EncodingError, InputError
from ..utils import to_checksum_address
from .types import PrimitiveType


@dataclass(frozen=True)
class SchemaField:
    name: str
    type: PrimitiveType


@dataclass(frozen=True)
class ParameterSchema:
    """Named, ordered, immutable list of ABI fields."""
    name: str
    fields: tuple[SchemaField, ...]

    @classmethod
    def define(cls, name: str, fields: Iterable[tuple[str, str]]) -> "ParameterSchema":
        """
        Build a schema from (field_name, type_tag) pairs.

        Example:
            ParameterSchema.define("display", [("name", "string"), ("decimals", "uint8")])
        """
        built = tuple(SchemaField(fname, PrimitiveType.parse(tag)) for fname, tag in fields)
        names = [f.name for f in built]
        if len(set(names)) != len(names):
            raise InputError(f"Duplicate field names in schema {name!r}: {names}")
        return cls(name, built)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def abi_types(self) -> list[str]:
        return [f.type.abi_type for f in self.fields]

    def signature(self) -> str:
        return f"({','.join(self.abi_types)})"


@dataclass(frozen=True)
class EncodedBlob:
    """Opaque ABI-encoded bytes together with the schema that produced them."""
    schema: ParameterSchema
    data: bytes

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def hex(self) -> str:
        return "0x" + self.data.hex()


def values_from_table(schema: ParameterSchema, table: Mapping[str, Any]) -> list[Any]:
    """
    Order a name -> value table by the schema's field order.

    Raises:
        InputError: If a field is missing or the table has unknown keys
    """
    unknown = sorted(set(table) - set(schema.field_names))
    if unknown:
        raise InputError(f"Unknown {schema.name} parameter(s): {', '.join(unknown)}")
    missing = [name for name in schema.field_names if name not in table]
    if missing:
        raise InputError(f"Missing {schema.name} parameter(s): {', '.join(missing)}")
    return [table[name] for name in schema.field_names]


def encode(schema: ParameterSchema, values: Sequence[Any]) -> EncodedBlob:
    """
    ABI-encode *values* under *schema*.

    Raises:
        InputError: If the value count differs from the schema length
        EncodingError: If a value cannot be represented under its type
    """
    if len(values) != len(schema):
        raise InputError(
            f"{schema.name} expects {len(schema)} values, got {len(values)}"
        )

    coerced = []
    for field, value in zip(schema.fields, values):
        try:
            coerced.append(field.type.coerce(value))
        except EncodingError as exc:
            raise EncodingError(f"{schema.name}.{field.name}: {exc}") from exc

    try:
        data = abi_encode(schema.abi_types, coerced)
    except AbiEncodingError as exc:
        raise EncodingError(f"{schema.name}: {exc}") from exc

    return EncodedBlob(schema, data)


def decode(schema: ParameterSchema, blob: Union[EncodedBlob, bytes]) -> list[Any]:
    """
    Decode bytes produced by ``encode`` with the same schema.

    Addresses come back EIP-55 checksummed; integers as int.

    Raises:
        EncodingError: If the bytes are not a valid encoding for the schema
    """
    raw = bytes(blob)
    try:
        decoded = abi_decode(schema.abi_types, raw)
    except (AbiDecodingError, UnicodeDecodeError) as exc:
        raise EncodingError(f"{schema.name}: cannot decode: {exc}") from exc

    values = []
    for field, value in zip(schema.fields, decoded):
        if field.type.kind == "address":
            value = to_checksum_address(value)
        values.append(value)
    return values
