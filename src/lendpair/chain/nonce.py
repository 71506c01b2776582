"""
Nonce counter for bursts of unconfirmed transactions.

A command that sends several transactions from one sender does not wait
for each to confirm before signing the next, so the on-chain transaction
count is stale after the first send.  The counter is read once from the
chain and then predicts every following nonce locally.

One counter per sender per run.  It is never shared and never persisted;
a nonce handed out for a transaction that is later rejected is simply
spent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class SequenceCounter:
    """Strictly increasing nonce source.  ``value`` is the last nonce issued."""
    value: int

    @classmethod
    def create(cls, seed: int) -> "SequenceCounter":
        """Counter whose first ``advance`` returns ``seed + 1``."""
        return cls(seed)

    @classmethod
    def for_next_nonce(cls, next_nonce: int) -> "SequenceCounter":
        """
        Counter whose first ``advance`` returns *next_nonce*.

        *next_nonce* is the sender's transaction count as reported by
        ``eth_getTransactionCount`` (the nonce the chain expects next).
        """
        return cls.create(next_nonce - 1)

    def advance(self) -> int:
        self.value += 1
        logger.debug("Assigned nonce %d", self.value)
        return self.value
