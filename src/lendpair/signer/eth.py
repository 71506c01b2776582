"""
ECDSA / secp256k1 key handling for lendpair.

The sender key is read from PRIVATE_KEY (process environment or
~/.lendpair/.env).  Only one key is used per run: every submission of a
command is signed by the same sender, which is what lets the nonce
counter predict sequence numbers.

Dependencies: eth-account (no full web3.py needed)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..config import LENDPAIR_ENV, load_env
from ..errors import InputError


def load_private_key(env_path: Optional[Path] = None) -> str:
    """
    Load the sender private key from the environment or .env file.

    Args:
        env_path: Path to .env file (default: ~/.lendpair/.env)

    Returns:
        0x-prefixed hex private key

    Raises:
        InputError: If PRIVATE_KEY is not configured
    """
    env_path = env_path or LENDPAIR_ENV
    load_env(env_path)

    private_key = os.environ.get("PRIVATE_KEY", "").strip()
    if not private_key:
        raise InputError(
            f"PRIVATE_KEY not found. Export it or set PRIVATE_KEY in {env_path}"
        )

    # Ensure 0x prefix
    if not private_key.startswith("0x"):
        private_key = "0x" + private_key

    return private_key


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: 0x-prefixed hex private key.
                     If None, loads from the environment.

    Raises:
        InputError: If the key is not a valid secp256k1 private key
    """
    if private_key is None:
        private_key = load_private_key()
    try:
        return Account.from_key(private_key)
    except (ValueError, TypeError) as exc:
        raise InputError(f"Invalid PRIVATE_KEY: {exc}") from exc


def get_address(private_key: Optional[str] = None) -> str:
    """0x-prefixed checksummed address for a private key."""
    return get_account(private_key).address
