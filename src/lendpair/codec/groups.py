"""
Parameter groups for FraxlendPair and VariableInterestRate construction.

FraxlendPair's constructor takes three opaque ``bytes`` arguments, each
an ABI-encoded group the pair decodes itself:

- configData:       asset, collateral, oracle and rate settings
- immutables:       circuit breaker, comptroller and timelock addresses
- customConfigData: ERC-20 display metadata of the pair's share token

The default tables are the Arbitrum test deployment values; a JSON file
passed to ``deploy-pair`` / ``deploy-rate`` overrides them key by key.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping, Optional

from ..errors import InputError
from .schema import EncodedBlob, ParameterSchema, encode, values_from_table

PAIR_CONFIG = ParameterSchema.define(
    "config",
    [
        ("asset", "address"),
        ("collateral", "address"),
        ("oracle", "address"),
        ("maxOracleDeviation", "uint32"),
        ("rateContract", "address"),
        ("fullUtilizationRate", "uint64"),
        ("maxLTV", "uint256"),
        ("liquidationFee", "uint256"),
        ("protocolLiquidationFee", "uint256"),
    ],
)

PAIR_IMMUTABLES = ParameterSchema.define(
    "immutables",
    [
        ("circuitBreaker", "address"),
        ("comptroller", "address"),
        ("timelock", "address"),
    ],
)

PAIR_CUSTOM_CONFIG = ParameterSchema.define(
    "customConfig",
    [
        ("name", "string memory"),
        ("symbol", "string memory"),
        ("decimals", "uint8"),
    ],
)

PAIR_CONSTRUCTOR = ParameterSchema.define(
    "pairConstructor",
    [
        ("configData", "bytes"),
        ("immutables", "bytes"),
        ("customConfigData", "bytes"),
    ],
)

RATE_CONSTRUCTOR = ParameterSchema.define(
    "rate",
    [
        ("suffix", "string memory"),
        ("vertexUtilization", "uint256"),
        ("vertexRatePercentOfDelta", "uint256"),
        ("minUtil", "uint256"),
        ("maxUtil", "uint256"),
        ("zeroUtilizationRate", "uint256"),
        ("minFullUtilizationRate", "uint256"),
        ("maxFullUtilizationRate", "uint256"),
        ("rateHalfLife", "uint256"),
    ],
)

_ADMIN = "0x93beE8C5f71c256F3eaE8Cdc33aA1f57711E6F38"

DEFAULT_PAIR_TABLES: dict[str, dict[str, Any]] = {
    "config": {
        "asset": "0xaf88d065e77c8cC2239327C5EDb3A432268e5831",  # Arbitrum USDC
        "collateral": "0x3F276c52A416dBb5Ec1554d9e9Ff6E65cFB7be2b",  # self-lending aspPEASUSDC
        "oracle": "0x0aeD34a4D48F7a55c9E029dCD63a2429b523cF26",
        "maxOracleDeviation": "5000",
        "rateContract": "0x31CA9b1779e0BFAf3F5005ac4Bf2Bd74DCB8c8cE",
        "fullUtilizationRate": "90000",
        "maxLTV": "0",  # 0 disables the LTV check
        "liquidationFee": "10000",
        "protocolLiquidationFee": "1000",
    },
    "immutables": {
        "circuitBreaker": _ADMIN,
        "comptroller": _ADMIN,
        "timelock": _ADMIN,
    },
    "customConfig": {
        "name": "Test Thing",
        "symbol": "TSTTHNG",
        "decimals": "18",
    },
}

DEFAULT_RATE_TABLE: dict[str, Any] = {
    "suffix": "[0.5 0.2@.875 5-10k] 2 days (.75-.85)",
    "vertexUtilization": "87500",
    "vertexRatePercentOfDelta": "200000000000000000",
    "minUtil": "75000",
    "maxUtil": "85000",
    "zeroUtilizationRate": "158247046",
    "minFullUtilizationRate": "1582470460",
    "maxFullUtilizationRate": "3164940920000",
    "rateHalfLife": "172800",
}

GROUPS: dict[str, ParameterSchema] = {
    schema.name: schema
    for schema in (PAIR_CONFIG, PAIR_IMMUTABLES, PAIR_CUSTOM_CONFIG, RATE_CONSTRUCTOR)
}


def load_tables(path: Path) -> dict[str, Any]:
    """Read a JSON parameter file; the top level must be an object."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise InputError(f"Cannot read parameter file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InputError(f"Parameter file {path} must contain a JSON object")
    return data


def _merge(defaults: Mapping[str, Any], overrides: Optional[Mapping[str, Any]], label: str) -> dict[str, Any]:
    if overrides is None:
        return dict(defaults)
    if not isinstance(overrides, Mapping):
        raise InputError(f"{label} overrides must be a JSON object")
    merged = dict(defaults)
    merged.update(overrides)
    return merged


def pair_tables(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, dict[str, Any]]:
    """Default pair tables with per-group overrides applied."""
    overrides = overrides or {}
    unknown = sorted(set(overrides) - set(DEFAULT_PAIR_TABLES))
    if unknown:
        raise InputError(f"Unknown parameter group(s): {', '.join(unknown)}")
    return {
        group: _merge(defaults, overrides.get(group), group)
        for group, defaults in DEFAULT_PAIR_TABLES.items()
    }


def rate_table(overrides: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    return _merge(DEFAULT_RATE_TABLE, overrides, RATE_CONSTRUCTOR.name)


def encode_group(schema: ParameterSchema, table: Mapping[str, Any]) -> EncodedBlob:
    return encode(schema, values_from_table(schema, table))


def encode_pair_constructor(tables: Mapping[str, Mapping[str, Any]]) -> EncodedBlob:
    """
    Encode the three pair groups and wrap them as constructor arguments.

    Each group is validated on its own before anything is wrapped, so a
    bad value in any group fails before a deployment is attempted.
    """
    config = encode_group(PAIR_CONFIG, tables["config"])
    immutables = encode_group(PAIR_IMMUTABLES, tables["immutables"])
    custom = encode_group(PAIR_CUSTOM_CONFIG, tables["customConfig"])
    return encode(PAIR_CONSTRUCTOR, [config, immutables, custom])


def encode_rate_constructor(table: Mapping[str, Any]) -> EncodedBlob:
    return encode_group(RATE_CONSTRUCTOR, table)
