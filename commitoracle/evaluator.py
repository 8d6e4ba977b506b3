"""GuessEvaluator — check a candidate against the stored commitment.

    candidate_commitment = sha256_hex(candidate)
    matched              = candidate_commitment == state.commitment

Only the verdict and a fixed tag are observable. The candidate and the
stored commitment never appear in the outcome or in log output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .crypto import hash_secret
from .events import EventLog
from .state import ContractState

logger = logging.getLogger(__name__)

TAG_MATCH = "You guessed right!"
TAG_MISS = "Try again."


@dataclass(frozen=True)
class GuessOutcome:
    """Verdict of a single evaluation. Never persisted."""

    matched: bool
    tag: str

    def __bool__(self) -> bool:
        return self.matched


def evaluate(
    state: ContractState,
    candidate: str,
    events: Optional[EventLog] = None,
) -> GuessOutcome:
    """Evaluate a plaintext candidate against ``state``.

    Comparison is exact string equality over lowercase hex. An
    uninitialized (empty) commitment never matches, since every digest is
    64 characters long. Reads the state, never writes it.
    """
    candidate_commitment = hash_secret(candidate)
    matched = candidate_commitment == state.commitment
    tag = TAG_MATCH if matched else TAG_MISS

    if events is not None:
        events.append(tag)
    logger.info(tag, extra={"matched": matched})

    return GuessOutcome(matched=matched, tag=tag)
