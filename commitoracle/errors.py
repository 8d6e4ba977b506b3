"""Errors raised by the hosting layer. Core operations never raise."""

from __future__ import annotations


class OracleError(Exception):
    """Base class for hosting errors."""


class AlreadyInitializedError(OracleError):
    def __init__(self, contract_id: str) -> None:
        super().__init__(f"Contract already initialized: {contract_id}")
        self.contract_id = contract_id


class NotInitializedError(OracleError):
    def __init__(self, contract_id: str) -> None:
        super().__init__(f"Contract not initialized: {contract_id}")
        self.contract_id = contract_id


class NotAuthorizedError(OracleError):
    def __init__(self, operation: str, caller: str) -> None:
        super().__init__(f"Caller {caller!r} is not authorized to call {operation}")
        self.operation = operation
        self.caller = caller


class InvalidContractIdError(OracleError):
    def __init__(self, contract_id: str) -> None:
        super().__init__(
            f"Invalid contract id {contract_id!r}: use letters, digits, '.', '_' or '-'"
            " and start with a letter or digit"
        )
        self.contract_id = contract_id


class CorruptStateError(OracleError):
    def __init__(self, contract_id: str, reason: str) -> None:
        super().__init__(f"Stored state for {contract_id} is unreadable: {reason}")
        self.contract_id = contract_id
