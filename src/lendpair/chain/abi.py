"""
ABI definitions and contract artifacts.

The pair and ERC-20 interfaces lendpair calls are small and stable, so
their ABI fragments are embedded here.  Deployment bytecode is read from
the contracts' build output (Hardhat ``artifacts/`` or Foundry ``out/``).
"""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Sequence

from ..codec.schema import ParameterSchema, decode, encode
from ..errors import ArtifactError, EncodingError, InputError
from ..utils import keccak256

logger = logging.getLogger(__name__)


def _fn(
    name: str,
    inputs: Sequence[tuple[str, str]] = (),
    outputs: Sequence[str] = (),
    mutability: str = "view",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": "", "type": t} for t in outputs],
        "stateMutability": mutability,
    }


# ---------------------------------------------------------------------------
# FraxlendPair (subset used by the commands)
# ---------------------------------------------------------------------------
PAIR_ABI: list[dict[str, Any]] = [
    _fn("deposit", [("_amount", "uint256"), ("_receiver", "address")], ["uint256"], "nonpayable"),
    _fn(
        "withdraw",
        [("_amount", "uint256"), ("_receiver", "address"), ("_owner", "address")],
        ["uint256"],
        "nonpayable",
    ),
    _fn("maxWithdraw", [("_owner", "address")], ["uint256"]),
    _fn("userCollateralBalance", [("", "address")], ["uint256"]),
    _fn("userBorrowShares", [("", "address")], ["uint256"]),
    _fn("externalAssetVault", [], ["address"]),
    _fn("setExternalAssetVault", [("_vault", "address")], [], "nonpayable"),
    _fn("timelockAddress", [], ["address"]),
]

# ---------------------------------------------------------------------------
# Minimal ERC-20 (IERC20Metadata)
# ---------------------------------------------------------------------------
ERC20_ABI: list[dict[str, Any]] = [
    _fn("approve", [("spender", "address"), ("amount", "uint256")], ["bool"], "nonpayable"),
    _fn("balanceOf", [("account", "address")], ["uint256"]),
    _fn("decimals", [], ["uint8"]),
    _fn("symbol", [], ["string"]),
]


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise InputError(f"Function {function_name} not found in ABI")


def _params_schema(label: str, params: list[dict[str, Any]]) -> ParameterSchema:
    return ParameterSchema.define(
        label,
        [(p.get("name") or f"arg{i}", p["type"]) for i, p in enumerate(params)],
    )


def function_selector(entry: dict[str, Any]) -> bytes:
    input_types = [inp["type"] for inp in entry.get("inputs", [])]
    sig = f"{entry['name']}({','.join(input_types)})"
    return keccak256(sig.encode("utf-8"))[:4]


def encode_call(abi: list[dict[str, Any]], function_name: str, args: Sequence[Any]) -> str:
    """
    ABI-encode a function call to 0x-prefixed hex calldata.

    Arguments go through the same schema checks as parameter groups, so
    a malformed address or an out-of-range amount fails here, before
    anything is signed.
    """
    entry = find_function(abi, function_name)
    schema = _params_schema(function_name, entry.get("inputs", []))
    encoded = encode(schema, list(args))
    return "0x" + function_selector(entry).hex() + encoded.data.hex()


def decode_result(abi: list[dict[str, Any]], function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        None for functions without outputs, the single value for one
        output, otherwise a tuple
    """
    entry = find_function(abi, function_name)
    outputs = entry.get("outputs", [])
    if not outputs:
        return None

    try:
        raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    except ValueError as exc:
        raise EncodingError(f"{function_name} returned malformed data: {data!r}") from exc
    decoded = decode(_params_schema(f"{function_name} result", outputs), raw)

    if len(decoded) == 1:
        return decoded[0]
    return tuple(decoded)


# ---------------------------------------------------------------------------
# Build artifacts
# ---------------------------------------------------------------------------

_ARTIFACT_DIRS = (Path("artifacts"), Path("out"))


def find_artifacts_dir(explicit: Optional[Path] = None) -> Path:
    """
    Locate the contracts build output.

    Order: *explicit*, LENDPAIR_ARTIFACTS, then ``artifacts/`` (Hardhat)
    or ``out/`` (Foundry) in the working directory or any parent.
    """
    configured = explicit or (
        Path(os.environ["LENDPAIR_ARTIFACTS"]) if os.environ.get("LENDPAIR_ARTIFACTS") else None
    )
    if configured is not None:
        if not configured.is_dir():
            raise ArtifactError(f"Artifacts directory not found: {configured}")
        return configured

    current = Path.cwd().resolve()
    for parent in [current, *current.parents]:
        for name in _ARTIFACT_DIRS:
            candidate = parent / name
            if candidate.is_dir():
                return candidate
    raise ArtifactError(
        "Cannot find contract artifacts. Compile the contracts "
        "('npx hardhat compile' or 'forge build') or pass --artifacts."
    )


@lru_cache(maxsize=16)
def _read_artifact(artifacts_dir: Path, contract_name: str) -> dict[str, Any]:
    matches = sorted(
        path
        for path in artifacts_dir.rglob(f"{contract_name}.json")
        if path.parent.name == f"{contract_name}.sol"
    )
    if not matches:
        raise ArtifactError(f"No artifact for {contract_name} under {artifacts_dir}")
    logger.debug("Using artifact %s", matches[0])
    with matches[0].open("r", encoding="utf-8") as f:
        return json.load(f)


def load_bytecode(contract_name: str, artifacts_dir: Optional[Path] = None) -> str:
    """
    Load creation bytecode for a contract.

    Returns:
        0x-prefixed hex bytecode

    Raises:
        ArtifactError: If the artifact is missing or has no bytecode
    """
    artifact = _read_artifact(find_artifacts_dir(artifacts_dir), contract_name)
    bytecode = artifact.get("bytecode", "")
    # Foundry nests the hex under "object"
    if isinstance(bytecode, dict):
        bytecode = bytecode.get("object", "")
    if not bytecode or bytecode == "0x":
        raise ArtifactError(f"No bytecode in artifact for {contract_name}")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return bytecode
