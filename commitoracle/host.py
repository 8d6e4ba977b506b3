"""Contract — hosting environment around the commitment core.

Owns the once-only construction guarantee, caller authorization,
persistence and the per-contract event log. The core functions in
``state`` and ``evaluator`` stay unaware of all of it.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from .authorizer import AllowAll, Authorizer, CallContext
from .errors import AlreadyInitializedError, NotAuthorizedError, NotInitializedError
from .evaluator import evaluate
from .events import EventLog
from .state import ContractState, get_commitment, initialize, set_commitment
from .storage import LocalStorage, check_contract_id

logger = logging.getLogger(__name__)

ANONYMOUS = CallContext(predecessor="anonymous")


class Contract:
    """A deployed commit-and-verify oracle.

    ``events`` keeps every outcome tag for the life of the object unless
    ``max_events`` caps it; long-running hosts should set a cap.
    """

    def __init__(
        self,
        contract_id: Optional[str] = None,
        authorizer: Optional[Authorizer] = None,
        storage: Optional[LocalStorage] = None,
        max_events: Optional[int] = None,
    ) -> None:
        self.id = check_contract_id(contract_id) if contract_id is not None else uuid.uuid4().hex[:12]
        self.authorizer = authorizer or AllowAll()
        self.storage = storage
        self.events = EventLog(max_events)
        self._state: Optional[ContractState] = None

    @classmethod
    def load(
        cls,
        contract_id: str,
        storage: LocalStorage,
        authorizer: Optional[Authorizer] = None,
    ) -> "Contract":
        """Reattach to a persisted contract.

        Raises FileNotFoundError, or CorruptStateError for an unreadable file.
        """
        contract = cls(contract_id, authorizer=authorizer, storage=storage)
        contract._state = storage.load(contract.id)
        return contract

    @property
    def initialized(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> ContractState:
        """Current state, or the default (empty) state before deploy."""
        return self._state if self._state is not None else ContractState()

    def _authorize(self, ctx: CallContext, operation: str, payload: str) -> None:
        if not self.authorizer.authorize(ctx, self.id, operation, payload):
            logger.warning(
                "call refused",
                extra={"contract_id": self.id, "operation": operation, "caller": ctx.predecessor},
            )
            raise NotAuthorizedError(operation, ctx.predecessor)

    def _persist(self) -> None:
        if self.storage is not None and self._state is not None:
            self.storage.save(self.id, self._state)

    def deploy(self, commitment: str, ctx: CallContext = ANONYMOUS) -> ContractState:
        """Run the init method. Allowed exactly once per contract."""
        if self._state is not None or (self.storage is not None and self.storage.exists(self.id)):
            raise AlreadyInitializedError(self.id)
        self._authorize(ctx, "new", commitment)
        self._state = initialize(commitment)
        self._persist()
        logger.info(
            "contract deployed",
            extra={"contract_id": self.id, "operation": "new", "caller": ctx.predecessor},
        )
        return self._state

    def set_commitment(self, commitment: str, ctx: CallContext = ANONYMOUS) -> None:
        if self._state is None:
            raise NotInitializedError(self.id)
        self._authorize(ctx, "set_commitment", commitment)
        set_commitment(self._state, commitment)
        self._persist()

    def destroy(self, ctx: CallContext = ANONYMOUS) -> None:
        """Tear the contract down so it can be deployed afresh.

        Drops the state (and its stored file) and clears the event log.
        """
        if self._state is None:
            raise NotInitializedError(self.id)
        self._authorize(ctx, "delete", "")
        if self.storage is not None:
            self.storage.delete(self.id)
        self._state = None
        self.events.clear()
        logger.info(
            "contract deleted",
            extra={"contract_id": self.id, "operation": "delete", "caller": ctx.predecessor},
        )

    def get_commitment(self) -> str:
        return get_commitment(self.state)

    def guess(self, candidate: str, ctx: CallContext = ANONYMOUS) -> bool:
        """Evaluate a guess. Open to every caller, never writes state."""
        logger.debug(
            "guess received",
            extra={"contract_id": self.id, "operation": "guess_solution", "caller": ctx.predecessor},
        )
        outcome = evaluate(self.state, candidate, self.events)
        return outcome.matched

    def get_logs(self) -> list[str]:
        return self.events.get_logs()
