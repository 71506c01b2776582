"""
Codec - Structured ABI parameter encoding for lendpair.

Declared ParameterSchemas are checked against value lists and encoded
with eth-abi into the blobs FraxlendPair and VariableInterestRate take
at construction.
"""

from .groups import (
    GROUPS,
    PAIR_CONFIG,
    PAIR_CONSTRUCTOR,
    PAIR_CUSTOM_CONFIG,
    PAIR_IMMUTABLES,
    RATE_CONSTRUCTOR,
    encode_group,
    encode_pair_constructor,
    encode_rate_constructor,
)
from .schema import (
    EncodedBlob,
    ParameterSchema,
    SchemaField,
    decode,
    encode,
    values_from_table,
)
from .types import PrimitiveType

__all__ = [
    "GROUPS",
    "PAIR_CONFIG",
    "PAIR_CONSTRUCTOR",
    "PAIR_CUSTOM_CONFIG",
    "PAIR_IMMUTABLES",
    "RATE_CONSTRUCTOR",
    "EncodedBlob",
    "ParameterSchema",
    "PrimitiveType",
    "SchemaField",
    "decode",
    "encode",
    "encode_group",
    "encode_pair_constructor",
    "encode_rate_constructor",
    "values_from_table",
]
