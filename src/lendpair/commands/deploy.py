"""
Contract deployment.

Commands:
- deploy-pair: deploy FraxlendPair with encoded config, immutables and
               display metadata groups
- deploy-rate: deploy a VariableInterestRate curve

Both take an optional JSON parameter file whose values override the
built-in tables key by key, e.g. for deploy-pair:

    {"config": {"maxLTV": "75000"}, "customConfig": {"symbol": "fUSDC"}}

and for deploy-rate a flat table:

    {"suffix": "...", "rateHalfLife": "86400"}
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..chain.abi import load_bytecode
from ..chain.tx import DEFAULT_DEPLOY_GAS, plan_deployment
from ..codec.groups import (
    encode_pair_constructor,
    encode_rate_constructor,
    load_tables,
    pair_tables,
    rate_table,
)
from ..codec.schema import EncodedBlob
from .common import (
    command_errors,
    load_sender,
    rpc_url_option,
    start_sequence,
    submit_all,
    timeout_option,
    wait_option,
)

params_option = click.option(
    "--params",
    "params_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file overriding the default parameter tables",
)

artifacts_option = click.option(
    "--artifacts",
    "artifacts_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    envvar="LENDPAIR_ARTIFACTS",
    help="Hardhat artifacts/ or Foundry out/ directory [env: LENDPAIR_ARTIFACTS]",
)

gas_limit_option = click.option(
    "--gas-limit",
    default=DEFAULT_DEPLOY_GAS,
    type=int,
    show_default=True,
    help="Gas limit for the creation transaction",
)

dry_run_option = click.option(
    "--dry-run",
    is_flag=True,
    help="Print the encoded constructor arguments and exit",
)


def _deploy(
    contract_name: str,
    constructor_args: EncodedBlob,
    artifacts_dir: Optional[Path],
    gas_limit: int,
    wait: bool,
    timeout: int,
    rpc_url: str,
) -> Optional[str]:
    bytecode = load_bytecode(contract_name, artifacts_dir)
    account = load_sender(rpc_url)
    counter = start_sequence(account.address, rpc_url)

    plan = [plan_deployment(counter, contract_name, bytecode, constructor_args, gas_limit)]
    results = submit_all(account, plan, rpc_url, wait=wait, timeout=timeout)
    return results[0].contract_address


@click.command("deploy-pair")
@params_option
@artifacts_option
@gas_limit_option
@dry_run_option
@wait_option
@timeout_option
@rpc_url_option
def deploy_pair(
    params_path: Optional[Path],
    artifacts_dir: Optional[Path],
    gas_limit: int,
    dry_run: bool,
    wait: bool,
    timeout: int,
    rpc_url: str,
) -> None:
    """Deploy a FraxlendPair."""
    with command_errors():
        overrides = load_tables(params_path) if params_path else None
        tables = pair_tables(overrides)
        constructor_args = encode_pair_constructor(tables)

        if dry_run:
            click.echo(f"constructor args: {constructor_args.hex()}")
            return

        address = _deploy(
            "FraxlendPair", constructor_args, artifacts_dir, gas_limit, wait, timeout, rpc_url
        )
        if address:
            click.echo(f"newPair address: {address}")
        else:
            click.echo("newPair address: (pending; check the transaction receipt)")


@click.command("deploy-rate")
@params_option
@artifacts_option
@gas_limit_option
@dry_run_option
@wait_option
@timeout_option
@rpc_url_option
def deploy_rate(
    params_path: Optional[Path],
    artifacts_dir: Optional[Path],
    gas_limit: int,
    dry_run: bool,
    wait: bool,
    timeout: int,
    rpc_url: str,
) -> None:
    """Deploy a VariableInterestRate contract."""
    with command_errors():
        overrides = load_tables(params_path) if params_path else None
        constructor_args = encode_rate_constructor(rate_table(overrides))

        if dry_run:
            click.echo(f"constructor args: {constructor_args.hex()}")
            return

        address = _deploy(
            "VariableInterestRate", constructor_args, artifacts_dir, gas_limit, wait, timeout, rpc_url
        )
        if address:
            click.echo(f"vir address: {address}")
        else:
            click.echo("vir address: (pending; check the transaction receipt)")
