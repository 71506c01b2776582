"""
Transaction planning, signing and submission.

A command first plans every transaction it intends to send as a
PendingSubmission, each carrying a nonce taken from one SequenceCounter.
Planning does all encoding, so bad input fails before anything reaches
the chain.  ``dispatch`` then signs and sends the plan in order without
waiting for confirmations; ``confirm`` polls receipts afterwards.

Failed submissions are not retried and their nonces are not reclaimed.
All gas is paid by the sender EOA.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional, Sequence

from eth_account.signers.local import LocalAccount

from ..codec.schema import EncodedBlob
from ..config import get_chain_id
from ..utils import to_checksum_address
from .abi import encode_call
from .nonce import SequenceCounter
from .rpc import get_gas_price, send_raw_transaction, wait_for_receipt

logger = logging.getLogger(__name__)

DEFAULT_CALL_GAS = 500_000
DEFAULT_DEPLOY_GAS = 8_000_000


@dataclass(frozen=True)
class PendingSubmission:
    """
    A fully encoded transaction waiting to be signed and sent.

    Attributes:
        to: Checksummed target address, or None for contract creation
        data: 0x-prefixed calldata (or creation code + constructor args)
        nonce: Sequence number assigned from the run's counter
        label: Human description used in progress output
    """
    to: Optional[str]
    data: str
    nonce: int
    label: str
    value: int = 0
    gas_limit: int = DEFAULT_CALL_GAS


@dataclass
class SubmissionResult:
    submission: PendingSubmission
    tx_hash: str
    receipt: Optional[dict[str, Any]] = field(default=None)

    @property
    def status(self) -> Optional[int]:
        if self.receipt is None:
            return None
        return int(self.receipt.get("status", "0x0"), 16)

    @property
    def contract_address(self) -> Optional[str]:
        if self.receipt is None:
            return None
        return self.receipt.get("contractAddress")


def plan_call(
    counter: SequenceCounter,
    contract_address: str,
    abi: list,
    function_name: str,
    args: Sequence[Any],
    value: int = 0,
    gas_limit: int = DEFAULT_CALL_GAS,
) -> PendingSubmission:
    """Encode a contract call and assign it the next nonce."""
    to = to_checksum_address(contract_address)
    data = encode_call(abi, function_name, args)
    return PendingSubmission(
        to=to,
        data=data,
        nonce=counter.advance(),
        label=function_name,
        value=value,
        gas_limit=gas_limit,
    )


def plan_deployment(
    counter: SequenceCounter,
    contract_name: str,
    bytecode: str,
    constructor_args: Optional[EncodedBlob] = None,
    gas_limit: int = DEFAULT_DEPLOY_GAS,
) -> PendingSubmission:
    """Append ABI-encoded constructor args to *bytecode* and assign a nonce."""
    data = bytecode if bytecode.startswith("0x") else "0x" + bytecode
    if constructor_args is not None:
        data += constructor_args.data.hex()
    return PendingSubmission(
        to=None,
        data=data,
        nonce=counter.advance(),
        label=f"deploy {contract_name}",
        gas_limit=gas_limit,
    )


def build_transaction(submission: PendingSubmission, gas_price: int, chain_id: int) -> dict[str, Any]:
    """Unsigned legacy transaction dict for eth-account."""
    tx: dict[str, Any] = {
        "data": submission.data,
        "value": submission.value,
        "nonce": submission.nonce,
        "gas": submission.gas_limit,
        "gasPrice": gas_price,
        "chainId": chain_id,
    }
    if submission.to is not None:
        tx["to"] = submission.to
    return tx


def sign_submission(
    submission: PendingSubmission,
    account: LocalAccount,
    gas_price: int,
    chain_id: int,
) -> str:
    """Sign *submission* and return the 0x-prefixed raw transaction."""
    signed = account.sign_transaction(build_transaction(submission, gas_price, chain_id))
    return "0x" + bytes(signed.raw_transaction).hex()


def dispatch(
    submissions: Iterable[PendingSubmission],
    account: LocalAccount,
    rpc_url: Optional[str] = None,
) -> Iterator[SubmissionResult]:
    """
    Sign and send *submissions* in order, without waiting for receipts.

    Yields one result per accepted submission as soon as the node returns
    its hash, so callers can report progress.  An ExternalFailure from the
    node propagates immediately; submissions after it are not sent.
    """
    gas_price = get_gas_price(rpc_url=rpc_url)
    chain_id = get_chain_id()

    for submission in submissions:
        raw_tx = sign_submission(submission, account, gas_price, chain_id)
        tx_hash = send_raw_transaction(raw_tx, rpc_url=rpc_url)
        logger.info("Sent %s (nonce %d): %s", submission.label, submission.nonce, tx_hash)
        yield SubmissionResult(submission=submission, tx_hash=tx_hash)


def confirm(
    results: Iterable[SubmissionResult],
    timeout: int = 120,
    rpc_url: Optional[str] = None,
) -> list[SubmissionResult]:
    """Wait for receipts in dispatch order and attach them to *results*."""
    confirmed = []
    for result in results:
        result.receipt = wait_for_receipt(result.tx_hash, timeout=timeout, rpc_url=rpc_url)
        logger.info("Confirmed %s: status %s", result.submission.label, result.status)
        confirmed.append(result)
    return confirmed
