"""
Offline encoding of a single parameter group.

Useful for checking a parameter file, or for producing a blob to paste
into a multisig or block explorer call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..codec.groups import (
    DEFAULT_PAIR_TABLES,
    GROUPS,
    RATE_CONSTRUCTOR,
    encode_group,
    load_tables,
    rate_table,
)
from .common import command_errors


@click.command("encode")
@click.argument("group", type=click.Choice(sorted(GROUPS)))
@click.option(
    "--params",
    "params_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help=(
        "JSON table overriding the group's default values; either flat, or "
        "grouped by name as accepted by deploy-pair"
    ),
)
def encode_cmd(group: str, params_path: Optional[Path]) -> None:
    """Print the ABI-encoded blob for a parameter group."""
    with command_errors():
        schema = GROUPS[group]
        overrides = load_tables(params_path) if params_path else {}
        if isinstance(overrides.get(group), dict):
            overrides = overrides[group]

        if schema is RATE_CONSTRUCTOR:
            table = rate_table(overrides)
        else:
            table = {**DEFAULT_PAIR_TABLES[group], **overrides}

        blob = encode_group(schema, table)
        click.echo(f"{schema.name} {schema.signature()}")
        click.echo(blob.hex())
