"""commitoracle — store a one-way commitment to a secret, verify guesses against it."""

from .authorizer import (
    AllowAll,
    Authorizer,
    CallContext,
    OwnerOnly,
    SignatureAuthorizer,
    generate_keypair,
    sign_call,
    verify_call,
)
from .crypto import hash_secret, is_commitment, secret_bytes
from .errors import (
    AlreadyInitializedError,
    CorruptStateError,
    InvalidContractIdError,
    NotAuthorizedError,
    NotInitializedError,
    OracleError,
)
from .evaluator import TAG_MATCH, TAG_MISS, GuessOutcome, evaluate
from .events import EventLog
from .host import Contract
from .state import ContractState, get_commitment, initialize, set_commitment
from .storage import LocalStorage

__version__ = "1.0.0"

__all__ = [
    "ContractState",
    "initialize",
    "set_commitment",
    "get_commitment",
    "GuessOutcome",
    "evaluate",
    "TAG_MATCH",
    "TAG_MISS",
    "EventLog",
    "hash_secret",
    "is_commitment",
    "secret_bytes",
    "Contract",
    "LocalStorage",
    "CallContext",
    "Authorizer",
    "AllowAll",
    "OwnerOnly",
    "SignatureAuthorizer",
    "generate_keypair",
    "sign_call",
    "verify_call",
    "OracleError",
    "AlreadyInitializedError",
    "CorruptStateError",
    "InvalidContractIdError",
    "NotInitializedError",
    "NotAuthorizedError",
]
