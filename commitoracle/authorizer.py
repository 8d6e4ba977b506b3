"""Caller authorization for mutating calls.

The core never checks who is calling. A ``Contract`` consults its
``Authorizer`` before ``new``, ``set_commitment`` and ``delete``; guesses
are open to everyone.

Signed calls use Ed25519 via PyNaCl. The signed message is
``"{contract_id}:{operation}:{nonce}:{payload}"``; signature and public
key travel base64 encoded in the ``CallContext``. Nonces must increase per
contract and key, so a signature is good for one call on one contract.
"""

from __future__ import annotations

import base64
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallContext:
    """Authenticated identity attached to a call by the transport."""

    predecessor: str
    signature: Optional[str] = None
    public_key: Optional[str] = None
    nonce: Optional[int] = None


class Authorizer(ABC):
    """Policy hook consulted before a mutating operation."""

    @abstractmethod
    def authorize(
        self, ctx: CallContext, contract_id: str, operation: str, payload: str,
    ) -> bool:
        """Return True when ``ctx`` may run ``operation`` on ``contract_id``."""


class AllowAll(Authorizer):
    """Any caller may mutate. This is how a bare deployment behaves."""

    def authorize(self, ctx, contract_id, operation, payload):
        return True


class OwnerOnly(Authorizer):
    """Only ``owner`` may mutate.

    With no owner given, whoever deploys (``new``) becomes the owner. That
    adoption lives in this object only and is not persisted: a contract
    reloaded from storage needs ``OwnerOnly(<account>)`` with the owner
    spelled out, as the CLI does with ``COMMITORACLE_OWNER``.
    """

    def __init__(self, owner: Optional[str] = None) -> None:
        self.owner = owner

    def authorize(self, ctx, contract_id, operation, payload):
        if self.owner is None:
            if operation != "new":
                return False
            self.owner = ctx.predecessor
            logger.info(
                "owner set to deployer",
                extra={"contract_id": contract_id, "caller": ctx.predecessor},
            )
            return True
        return ctx.predecessor == self.owner


class SignatureAuthorizer(Authorizer):
    """Accept calls signed by one of the allowed Ed25519 public keys.

    Each (contract, key) pair remembers the highest nonce it accepted;
    a call must carry a larger one. The record is held in memory.
    """

    def __init__(self, allowed_public_keys: Iterable[bytes]) -> None:
        self.allowed = {base64.b64encode(k).decode("ascii") for k in allowed_public_keys}
        self._last_nonce: dict[tuple[str, str], int] = {}

    def authorize(self, ctx, contract_id, operation, payload):
        if ctx.public_key not in self.allowed or ctx.nonce is None:
            return False
        key = (contract_id, ctx.public_key)
        if ctx.nonce <= self._last_nonce.get(key, -1):
            logger.warning(
                "stale nonce",
                extra={"contract_id": contract_id, "operation": operation, "caller": ctx.predecessor},
            )
            return False
        if not verify_call(ctx, contract_id, operation, payload):
            return False
        self._last_nonce[key] = ctx.nonce
        return True


def _message(contract_id: str, operation: str, nonce: int, payload: str) -> bytes:
    return f"{contract_id}:{operation}:{nonce}:{payload}".encode("utf-8", "surrogatepass")


def generate_keypair() -> tuple[bytes, bytes]:
    """Generate an Ed25519 keypair.

    Returns (private_key_bytes, public_key_bytes), both 32 bytes.
    """
    sk = SigningKey.generate()
    return bytes(sk), bytes(sk.verify_key)


def sign_call(
    contract_id: str,
    operation: str,
    payload: str,
    private_key: bytes,
    predecessor: str,
    nonce: int,
) -> CallContext:
    """Build a CallContext carrying a signature over one call."""
    sk = SigningKey(private_key)
    signed = sk.sign(_message(contract_id, operation, nonce, payload))
    return CallContext(
        predecessor=predecessor,
        signature=base64.b64encode(signed.signature).decode("ascii"),
        public_key=base64.b64encode(bytes(sk.verify_key)).decode("ascii"),
        nonce=nonce,
    )


def verify_call(ctx: CallContext, contract_id: str, operation: str, payload: str) -> bool:
    """Verify the signature in ``ctx`` against the given call."""
    if ctx.signature is None or ctx.public_key is None or ctx.nonce is None:
        return False
    try:
        sig = base64.b64decode(ctx.signature)
        vk = VerifyKey(base64.b64decode(ctx.public_key))
        vk.verify(_message(contract_id, operation, ctx.nonce, payload), sig)
        return True
    except (BadSignatureError, ValueError, TypeError):
        return False
