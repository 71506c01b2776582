"""
JSON-RPC client for the ledger endpoint.

Lightweight alternative to web3.py: httpx for HTTP, eth-abi (through the
codec) for call data.  Supports view calls, balance and nonce queries,
raw transaction submission and receipt polling.
"""

from __future__ import annotations

import itertools
import logging
import time
from typing import Any, Optional, Sequence

import httpx

from ..config import get_rpc_url
from ..errors import ExternalFailure
from .abi import decode_result, encode_call

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)


def _rpc_call(method: str, params: list, rpc_url: Optional[str] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        rpc_url: RPC endpoint URL (default: RPC_URL setting)

    Returns:
        Result field from the RPC response

    Raises:
        ExternalFailure: On transport errors or an RPC error payload
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": next(_request_ids),
    }
    logger.debug("RPC %s -> %s", method, url)

    try:
        with httpx.Client(timeout=30) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        raise ExternalFailure(f"RPC {method} failed: {exc}") from exc

    if not isinstance(data, dict):
        raise ExternalFailure(f"RPC {method} returned a non-object response: {data!r}")
    if "error" in data:
        raise ExternalFailure(f"RPC error in {method}: {data['error']}")

    return data.get("result")


def read_contract(
    contract_address: str,
    function_name: str,
    args: Optional[Sequence[Any]] = None,
    abi: Optional[list] = None,
    rpc_url: Optional[str] = None,
) -> Any:
    """
    Read from a smart contract (eth_call).

    Args:
        contract_address: 0x-prefixed contract address
        function_name: Function to call
        args: Function arguments (default: [])
        abi: Contract ABI containing the function
        rpc_url: RPC endpoint URL

    Returns:
        Decoded return value(s), or None for empty return data
    """
    if abi is None:
        raise ValueError("abi must be provided")

    calldata = encode_call(abi, function_name, args or [])

    result = _rpc_call(
        "eth_call",
        [{"to": contract_address, "data": calldata}, "latest"],
        rpc_url=rpc_url,
    )

    if result is None or result == "0x":
        return None

    return decode_result(abi, function_name, result)


def _quantity(method: str, result: Any) -> int:
    """Parse a hex QUANTITY result."""
    if not isinstance(result, str):
        raise ExternalFailure(f"RPC {method} returned {result!r}, expected a hex quantity")
    try:
        return int(result, 16)
    except ValueError:
        raise ExternalFailure(f"RPC {method} returned {result!r}, expected a hex quantity") from None


def get_balance(address: str, rpc_url: Optional[str] = None) -> int:
    """Native balance of *address* in wei."""
    result = _rpc_call("eth_getBalance", [address, "latest"], rpc_url=rpc_url)
    return _quantity("eth_getBalance", result)


def get_nonce(address: str, rpc_url: Optional[str] = None) -> int:
    """
    Next nonce the chain expects from *address*.

    Uses the "pending" block tag so transactions still in the mempool
    from an earlier run are counted.
    """
    result = _rpc_call("eth_getTransactionCount", [address, "pending"], rpc_url=rpc_url)
    return _quantity("eth_getTransactionCount", result)


def get_gas_price(rpc_url: Optional[str] = None) -> int:
    result = _rpc_call("eth_gasPrice", [], rpc_url=rpc_url)
    return _quantity("eth_gasPrice", result)


def send_raw_transaction(raw_tx: str, rpc_url: Optional[str] = None) -> str:
    """
    Send a signed raw transaction.

    Args:
        raw_tx: 0x-prefixed hex encoded signed transaction

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], rpc_url=rpc_url)


def wait_for_receipt(
    tx_hash: str,
    timeout: int = 120,
    poll_interval: float = 2.0,
    rpc_url: Optional[str] = None,
) -> dict:
    """
    Wait for a transaction receipt.

    Raises:
        ExternalFailure: If no receipt appears within *timeout* seconds
    """
    start = time.time()
    while time.time() - start < timeout:
        receipt = _rpc_call(
            "eth_getTransactionReceipt", [tx_hash], rpc_url=rpc_url
        )
        if receipt is not None:
            return receipt
        time.sleep(poll_interval)

    raise ExternalFailure(f"Transaction {tx_hash} not confirmed within {timeout}s")
