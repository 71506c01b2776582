"""
Error taxonomy for lendpair.

Every error carries an ``exit_code`` so the CLI can map failures to a
process status without inspecting messages.
"""

from __future__ import annotations


class LendpairError(RuntimeError):
    exit_code: int = 1


class InputError(LendpairError, ValueError):
    """Missing or malformed caller-supplied parameter."""

    exit_code = 2


class EncodingError(LendpairError, ValueError):
    """A value cannot be represented under its declared ABI type."""

    exit_code = 3


class ExternalFailure(LendpairError):
    """The ledger endpoint rejected or could not process a request."""

    exit_code = 4


class ArtifactError(LendpairError):
    exit_code = 5


__all__ = [
    "ArtifactError",
    "EncodingError",
    "ExternalFailure",
    "InputError",
    "LendpairError",
]
