"""
Configuration for lendpair.

Values come from the process environment, optionally seeded from
``~/.lendpair/.env``.  Commands also expose each value as a click option
with an ``envvar`` fallback, so the environment names below match the
ones the deployment scripts have always used (PAIR, VAULT).  The
position borrower is POSITION_USER, since shells always set USER.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .errors import InputError

# Default config directory
LENDPAIR_DIR = Path.home() / ".lendpair"
LENDPAIR_ENV = LENDPAIR_DIR / ".env"

# Arbitrum One
DEFAULT_RPC_URL = "https://arb1.arbitrum.io/rpc"
DEFAULT_CHAIN_ID = 42161

DEFAULTS: dict[str, str] = {
    "RPC_URL": DEFAULT_RPC_URL,
    "CHAIN_ID": str(DEFAULT_CHAIN_ID),
    # Arbitrum USDC
    "ASSET_ADDRESS": "0xaf88d065e77c8cC2239327C5EDb3A432268e5831",
}


def load_env(env_path: Optional[Path] = None) -> Optional[Path]:
    """Load ``~/.lendpair/.env`` into the process environment.

    Variables already set in the environment win over the file.

    Returns:
        The path that was loaded, or None if no file exists
    """
    env_path = env_path or LENDPAIR_ENV
    if not env_path.exists():
        return None
    load_dotenv(env_path, override=False)
    return env_path


def get_setting(name: str) -> Optional[str]:
    """Environment value for *name*, falling back to DEFAULTS."""
    value = os.environ.get(name)
    if value:
        return value.strip()
    return DEFAULTS.get(name)


def get_rpc_url() -> str:
    return get_setting("RPC_URL") or DEFAULT_RPC_URL


def get_chain_id() -> int:
    raw = get_setting("CHAIN_ID") or str(DEFAULT_CHAIN_ID)
    try:
        return int(raw)
    except ValueError:
        raise InputError(f"CHAIN_ID must be an integer, got {raw!r}") from None
