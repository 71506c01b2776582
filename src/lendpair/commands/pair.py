"""
State-changing FraxlendPair operations.

Commands:
- deposit:   approve the pair for the asset, then deposit
- withdraw:  withdraw asset to the sender
- set-vault: point the pair at an external asset vault (timelock only)

Each command reads the sender's nonce once and plans all of its
transactions up front, so they can be sent back to back without waiting
for confirmations in between.
"""

from __future__ import annotations

import click

from ..chain.abi import ERC20_ABI, PAIR_ABI
from ..chain.rpc import read_contract
from ..chain.tx import plan_call
from ..config import DEFAULTS
from ..errors import ExternalFailure
from ..utils import to_base_units
from .common import (
    address_param,
    command_errors,
    load_sender,
    pair_option,
    rpc_url_option,
    start_sequence,
    submit_all,
    timeout_option,
    wait_option,
)

# Allowance granted to the pair by ``deposit``
DEFAULT_ALLOWANCE = 2 ** 96 - 1

asset_option = click.option(
    "--asset",
    envvar="ASSET_ADDRESS",
    default=DEFAULTS["ASSET_ADDRESS"],
    show_default=True,
    callback=address_param,
    help="Asset token the pair lends [env: ASSET_ADDRESS]",
)


def _asset_decimals(asset: str, rpc_url: str) -> int:
    decimals = read_contract(asset, "decimals", [], abi=ERC20_ABI, rpc_url=rpc_url)
    if decimals is None:
        raise ExternalFailure(f"{asset} returned no decimals(); is it an ERC-20?")
    return int(decimals)


@click.command()
@pair_option
@asset_option
@click.option("--amount", default="1", show_default=True, help="Amount in whole asset units")
@click.option(
    "--allowance",
    default=DEFAULT_ALLOWANCE,
    type=int,
    show_default=True,
    help="Allowance approved for the pair, in base units",
)
@wait_option
@timeout_option
@rpc_url_option
def deposit(
    pair: str,
    asset: str,
    amount: str,
    allowance: int,
    wait: bool,
    timeout: int,
    rpc_url: str,
) -> None:
    """
    Approve the pair and deposit asset into it.

    Sends approve and deposit back to back with consecutive nonces.
    """
    with command_errors():
        account = load_sender(rpc_url)
        counter = start_sequence(account.address, rpc_url)

        decimals = _asset_decimals(asset, rpc_url)
        base_amount = to_base_units(amount, decimals)

        plan = [
            plan_call(counter, asset, ERC20_ABI, "approve", [pair, allowance]),
            plan_call(counter, pair, PAIR_ABI, "deposit", [base_amount, account.address]),
        ]
        click.echo(f"Depositing {amount} ({base_amount} base units) into {pair}")
        submit_all(account, plan, rpc_url, wait=wait, timeout=timeout)
        click.echo("Script complete!")


@click.command()
@pair_option
@asset_option
@click.option("--amount", default="0.01", show_default=True, help="Amount in whole asset units")
@wait_option
@timeout_option
@rpc_url_option
def withdraw(
    pair: str,
    asset: str,
    amount: str,
    wait: bool,
    timeout: int,
    rpc_url: str,
) -> None:
    """Withdraw asset from the pair to the sender."""
    with command_errors():
        account = load_sender(rpc_url)
        counter = start_sequence(account.address, rpc_url)

        base_amount = to_base_units(amount, _asset_decimals(asset, rpc_url))
        plan = [
            plan_call(
                counter,
                pair,
                PAIR_ABI,
                "withdraw",
                [base_amount, account.address, account.address],
            ),
        ]
        click.echo(f"Withdrawing {amount} ({base_amount} base units) from {pair}")
        submit_all(account, plan, rpc_url, wait=wait, timeout=timeout)
        click.echo("Script complete!")


@click.command("set-vault")
@pair_option
@click.option(
    "--vault",
    envvar="VAULT",
    required=True,
    callback=address_param,
    help="External asset vault address [env: VAULT]",
)
@wait_option
@timeout_option
@rpc_url_option
def set_vault(pair: str, vault: str, wait: bool, timeout: int, rpc_url: str) -> None:
    """
    Set the pair's external asset vault.

    Only the pair's timelock may do this; the timelock address is shown
    first so a mismatch with the sender is easy to spot.
    """
    with command_errors():
        account = load_sender(rpc_url)
        counter = start_sequence(account.address, rpc_url)

        timelock = read_contract(pair, "timelockAddress", [], abi=PAIR_ABI, rpc_url=rpc_url)
        click.echo(f"Timelock address: {timelock}")
        if timelock is not None and str(timelock).lower() != account.address.lower():
            click.secho("  Sender is not the timelock; the call will likely revert.", fg="yellow")

        plan = [plan_call(counter, pair, PAIR_ABI, "setExternalAssetVault", [vault])]
        submit_all(account, plan, rpc_url, wait=wait, timeout=timeout)
        click.echo("Script complete!")
