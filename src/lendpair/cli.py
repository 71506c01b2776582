"""
lendpair CLI

Command-line interface for deploying and operating a FraxlendPair.

Commands:
  deploy-pair   - Deploy a FraxlendPair from encoded parameter groups
  deploy-rate   - Deploy a VariableInterestRate curve
  deposit       - Approve and deposit asset
  withdraw      - Withdraw asset
  set-vault     - Set the external asset vault (timelock)
  vault         - Show the external asset vault
  max-withdraw  - Show the withdrawable amount for an owner
  position      - Show a borrower's collateral and borrow shares
  encode        - Encode a parameter group offline
  whoami        - Show the sender address
  info          - Show configuration
"""

from __future__ import annotations

import logging
import sys

import click

from .config import LENDPAIR_ENV, get_chain_id, get_rpc_url, get_setting, load_env
from .errors import InputError
from .logging_utils import configure_logging
from .signer.eth import get_address


# ============ Constants ============

VERSION = "0.3.0"


# ============ Banner ============


def _print_banner() -> None:
    click.echo(
        click.style("  ◆ ", fg="cyan")
        + click.style("L E N D P A I R", fg="bright_white", bold=True)
        + click.style(f"  v{VERSION}", dim=True)
    )
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="lendpair")
@click.option("--verbose", "-v", is_flag=True, help="Log RPC traffic and nonce assignment")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """lendpair - FraxlendPair deployment and operations."""
    load_env()
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Commands ============

from .commands.deploy import deploy_pair, deploy_rate
from .commands.encode import encode_cmd
from .commands.pair import deposit, set_vault, withdraw
from .commands.query import max_withdraw, position, vault

cli.add_command(deploy_pair)
cli.add_command(deploy_rate)
cli.add_command(deposit)
cli.add_command(withdraw)
cli.add_command(set_vault)
cli.add_command(vault)
cli.add_command(max_withdraw)
cli.add_command(position)
cli.add_command(encode_cmd)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the sender address."""
    try:
        click.echo(f"Address: {get_address()}")
    except InputError as exc:
        click.echo("No sender key found.")
        click.echo(str(exc))
        sys.exit(exc.exit_code)


# ============ Info ============


@cli.command()
def info() -> None:
    """Show configuration."""
    _print_banner()

    try:
        sender = click.style(get_address(), fg="bright_white")
    except InputError:
        sender = click.style("not configured", fg="yellow") + click.style(
            f"  (set PRIVATE_KEY in {LENDPAIR_ENV})", dim=True
        )

    rows = [
        ("Sender:  ", sender),
        ("RPC:     ", get_rpc_url()),
        ("Chain ID:", str(get_chain_id())),
        ("Asset:   ", get_setting("ASSET_ADDRESS") or "-"),
        ("Pair:    ", get_setting("PAIR") or click.style("not set", fg="yellow")),
    ]
    for label, value in rows:
        click.echo(click.style(f"  {label} ", dim=True) + value)
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """lendpair CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
