"""One-way transform for commitments."""

from __future__ import annotations

import hashlib
import re

COMMITMENT_LENGTH = 64

_COMMITMENT_RE = re.compile(r"[0-9a-f]{64}")


def secret_bytes(secret: str) -> bytes:
    """UTF-8 bytes of a secret; total over every ``str``.

    Text decoded from undecodable OS bytes (argv, environment) carries
    them as surrogate escapes and gets its original bytes back. Any other
    lone surrogate is encoded with ``surrogatepass``.
    """
    try:
        return secret.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return secret.encode("utf-8", "surrogatepass")


def hash_secret(secret: str) -> str:
    """Derive the commitment for a plaintext secret.

    SHA-256 over the UTF-8 bytes, lowercase hex. The empty string maps to
    the well-known ``e3b0c442...`` digest, never to ``""``.
    """
    return hashlib.sha256(secret_bytes(secret)).hexdigest()


def is_commitment(value: str) -> bool:
    """Check that a value has the shape of a commitment (64 lowercase hex)."""
    return _COMMITMENT_RE.fullmatch(value) is not None
