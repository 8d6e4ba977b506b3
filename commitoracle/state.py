"""ContractState and the commitment store operations.

The state holds exactly one field: the hex commitment. The plaintext
secret is never stored. Construction happens once per deployed instance;
that guarantee belongs to the hosting environment (see ``host.Contract``),
so ``initialize`` itself does not check for a previous call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class ContractState:
    """The single persistent entity. Empty commitment until initialized."""

    commitment: str = ""

    @property
    def initialized(self) -> bool:
        return self.commitment != ""

    def to_dict(self) -> dict[str, Any]:
        return {"commitment": self.commitment}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContractState":
        return cls(commitment=data.get("commitment", ""))


def initialize(commitment: str) -> ContractState:
    """Construct the state with the given commitment.

    Precondition: first construction of this instance. Calling it again
    simply produces a fresh state; the host must refuse re-initialization.
    """
    logger.info("commitment initialized")
    return ContractState(commitment=commitment)


def set_commitment(state: ContractState, commitment: str) -> None:
    """Overwrite the stored commitment. Last write wins.

    Caller identity is not checked here; authorization is layered on by
    the caller.
    """
    state.commitment = commitment
    logger.info("commitment replaced")


def get_commitment(state: ContractState) -> str:
    return state.commitment
