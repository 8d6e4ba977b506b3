"""Contract state on disk.

One JSON document per contract under the storage directory::

    {"id": "crossword", "state": {"commitment": "69c2feb0..."}}

Only the commitment is written, never a plaintext secret. Writes go to a
temporary file in the same directory and are moved into place with
``os.replace``, so a reader sees either the old document or the new one.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from .errors import CorruptStateError, InvalidContractIdError
from .state import ContractState

logger = logging.getLogger(__name__)

CONTRACT_ID_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]{0,127}")


def check_contract_id(contract_id: str) -> str:
    """Return ``contract_id`` if it is safe to use as a file name."""
    if not isinstance(contract_id, str) or CONTRACT_ID_RE.fullmatch(contract_id) is None:
        raise InvalidContractIdError(str(contract_id))
    return contract_id


def _decode(contract_id: str, raw: str) -> ContractState:
    try:
        data = json.loads(raw)
        state = data["state"]
        if not isinstance(state, dict) or not isinstance(state.get("commitment", ""), str):
            raise TypeError("state is not a commitment record")
        return ContractState.from_dict(state)
    except json.JSONDecodeError as e:
        raise CorruptStateError(contract_id, f"invalid JSON ({e.msg})") from e
    except (KeyError, TypeError) as e:
        raise CorruptStateError(contract_id, f"missing or malformed state ({e})") from e


class LocalStorage:
    """Directory of contract states keyed by contract id."""

    def __init__(self, directory: str | Path = ".commitoracle") -> None:
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, contract_id: str) -> Path:
        return self.directory / f"{check_contract_id(contract_id)}.json"

    def save(self, contract_id: str, state: ContractState) -> Path:
        """Atomically write a contract's state. Returns the file path."""
        path = self.path_for(contract_id)
        payload = json.dumps({"id": contract_id, "state": state.to_dict()}, indent=2)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{contract_id}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        return path

    def load(self, contract_id: str) -> ContractState:
        """Read a contract's state.

        Raises FileNotFoundError when absent, CorruptStateError when the
        document cannot be decoded.
        """
        path = self.path_for(contract_id)
        if not path.exists():
            raise FileNotFoundError(f"Contract not found: {contract_id}")
        return _decode(contract_id, path.read_text(encoding="utf-8"))

    def exists(self, contract_id: str) -> bool:
        return self.path_for(contract_id).exists()

    def delete(self, contract_id: str) -> bool:
        """Remove a contract's state. Returns False if there was none."""
        path = self.path_for(contract_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def list_contracts(self) -> list[dict[str, Any]]:
        """Summaries of stored contracts; unreadable documents are reported, not skipped."""
        contracts = []
        for path in sorted(self.directory.glob("*.json")):
            contract_id = path.stem
            try:
                state = _decode(contract_id, path.read_text(encoding="utf-8"))
            except CorruptStateError as e:
                logger.warning(str(e), extra={"contract_id": contract_id})
                contracts.append({"id": contract_id, "status": "corrupt", "path": str(path)})
                continue
            contracts.append({
                "id": contract_id,
                "status": "initialized" if state.initialized else "empty",
                "path": str(path),
            })
        return contracts
