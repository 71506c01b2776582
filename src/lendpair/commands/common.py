"""Helpers shared by the lendpair commands."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

import click
from eth_account.signers.local import LocalAccount

from ..chain.nonce import SequenceCounter
from ..chain.rpc import get_balance, get_nonce
from ..chain.tx import PendingSubmission, SubmissionResult, confirm, dispatch
from ..config import DEFAULT_RPC_URL
from ..errors import ExternalFailure, InputError, LendpairError
from ..signer.eth import get_account
from ..utils import from_base_units, to_checksum_address


def address_param(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    """click callback: checksum an address option or reject it."""
    if value is None:
        return None
    try:
        return to_checksum_address(value.strip())
    except InputError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from exc


rpc_url_option = click.option(
    "--rpc-url",
    envvar="RPC_URL",
    default=DEFAULT_RPC_URL,
    show_default=True,
    help="JSON-RPC endpoint URL",
)

pair_option = click.option(
    "--pair",
    envvar="PAIR",
    required=True,
    callback=address_param,
    help="FraxlendPair contract address [env: PAIR]",
)

wait_option = click.option(
    "--wait/--no-wait",
    default=True,
    help="Wait for receipts after all transactions are sent",
)

timeout_option = click.option(
    "--timeout",
    default=120,
    type=int,
    show_default=True,
    help="Receipt wait timeout in seconds per transaction",
)


@contextmanager
def command_errors() -> Iterator[None]:
    """Turn lendpair errors into a red message and the error's exit code."""
    try:
        yield
    except LendpairError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)


def load_sender(rpc_url: str) -> LocalAccount:
    """Load the sender account and print its address and balance."""
    account = get_account()
    click.echo(f"Sending with the account: {account.address}")
    balance = get_balance(account.address, rpc_url=rpc_url)
    click.echo(f"Account balance: {from_base_units(balance, 18)} ETH")
    return account


def start_sequence(address: str, rpc_url: str) -> SequenceCounter:
    """Read the sender's next nonce once and build the run's counter."""
    return SequenceCounter.for_next_nonce(get_nonce(address, rpc_url=rpc_url))


def submit_all(
    account: LocalAccount,
    plan: Sequence[PendingSubmission],
    rpc_url: str,
    wait: bool = True,
    timeout: int = 120,
) -> list[SubmissionResult]:
    """
    Send *plan* as one burst, then optionally wait for every receipt.

    Each transaction is reported as soon as the node accepts it, so if a
    later send fails the output still shows what went out.

    Raises:
        ExternalFailure: If a send fails or a confirmed transaction reverted
    """
    sent: list[SubmissionResult] = []
    for result in dispatch(plan, account, rpc_url=rpc_url):
        click.echo(
            f"  sent {result.submission.label} "
            f"(nonce {result.submission.nonce}): {result.tx_hash}"
        )
        sent.append(result)

    if not wait:
        return sent

    confirmed = confirm(sent, timeout=timeout, rpc_url=rpc_url)
    reverted = [r for r in confirmed if r.status != 1]
    for result in confirmed:
        colour = "green" if result.status == 1 else "red"
        state = "confirmed" if result.status == 1 else "reverted"
        click.secho(f"  {result.submission.label}: {state}", fg=colour)
    if reverted:
        labels = ", ".join(r.submission.label for r in reverted)
        raise ExternalFailure(f"Transaction reverted: {labels}")
    return confirmed
