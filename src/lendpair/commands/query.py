"""
Read-only FraxlendPair queries (eth_call, no gas, no nonce).
"""

from __future__ import annotations

from typing import Optional

import click

from ..chain.abi import PAIR_ABI
from ..chain.rpc import read_contract
from ..signer.eth import get_address
from .common import address_param, command_errors, pair_option, rpc_url_option


@click.command()
@pair_option
@rpc_url_option
def vault(pair: str, rpc_url: str) -> None:
    """Show the pair's external asset vault."""
    with command_errors():
        value = read_contract(pair, "externalAssetVault", [], abi=PAIR_ABI, rpc_url=rpc_url)
        click.echo(f"Vault: {value}")


@click.command("max-withdraw")
@pair_option
@click.option(
    "--owner",
    default=None,
    callback=address_param,
    help="Share owner (default: the sender address)",
)
@rpc_url_option
def max_withdraw(pair: str, owner: Optional[str], rpc_url: str) -> None:
    """Show how much asset an owner can withdraw right now."""
    with command_errors():
        owner = owner or get_address()
        value = read_contract(pair, "maxWithdraw", [owner], abi=PAIR_ABI, rpc_url=rpc_url)
        click.echo(f"Max withdraw: {value}")


@click.command()
@pair_option
@click.option(
    "--user",
    envvar="POSITION_USER",
    required=True,
    callback=address_param,
    help="Borrower address [env: POSITION_USER]",
)
@rpc_url_option
def position(pair: str, user: str, rpc_url: str) -> None:
    """Show a borrower's collateral balance and borrow shares."""
    with command_errors():
        collateral = read_contract(
            pair, "userCollateralBalance", [user], abi=PAIR_ABI, rpc_url=rpc_url
        )
        shares = read_contract(pair, "userBorrowShares", [user], abi=PAIR_ABI, rpc_url=rpc_url)
        click.echo(f"userCollateralBalance: {collateral}")
        click.echo(f"userBorrowShares: {shares}")
