"""
commitoracle CLI.

Commands:
    commitoracle hash <secret>                      — print the commitment for a secret
    commitoracle deploy <id> <commitment> --caller  — initialize a contract (once)
    commitoracle set <id> <commitment> --caller     — replace the commitment
    commitoracle get <id>                           — show the stored commitment
    commitoracle guess <id> <candidate>             — check a guess
    commitoracle list                               — list stored contracts
    commitoracle delete <id> --caller               — tear a contract down for a fresh deploy
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from .authorizer import AllowAll, Authorizer, CallContext, OwnerOnly
from .config import Settings, get_settings
from .crypto import hash_secret, is_commitment
from .errors import OracleError
from .host import Contract
from .observability import setup_logging
from .storage import LocalStorage

logger = logging.getLogger(__name__)

EXIT_MISS = 2


def _authorizer(settings: Settings) -> Authorizer:
    if settings.owner:
        return OwnerOnly(settings.owner)
    return AllowAll()


def _storage(args: argparse.Namespace) -> LocalStorage:
    return LocalStorage(args.settings.storage_dir)


def _commitment_arg(args: argparse.Namespace) -> str:
    if args.secret:
        return hash_secret(args.commitment)
    if not is_commitment(args.commitment):
        logger.warning("value does not look like a sha256 hex digest; storing as given")
    return args.commitment


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_hash(args: argparse.Namespace) -> int:
    print(hash_secret(args.secret))
    return 0


def cmd_deploy(args: argparse.Namespace) -> int:
    contract = Contract(
        args.contract_id,
        authorizer=_authorizer(args.settings),
        storage=_storage(args),
    )
    contract.deploy(_commitment_arg(args), CallContext(args.caller))
    print(f"Deployed {contract.id}")
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    contract = Contract.load(
        args.contract_id, _storage(args), authorizer=_authorizer(args.settings),
    )
    contract.set_commitment(_commitment_arg(args), CallContext(args.caller))
    print(f"Updated {contract.id}")
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    contract = Contract.load(args.contract_id, _storage(args))
    print(contract.get_commitment())
    return 0


def cmd_guess(args: argparse.Namespace) -> int:
    contract = Contract.load(args.contract_id, _storage(args))
    matched = contract.guess(args.candidate, CallContext(args.caller))
    for tag in contract.get_logs():
        print(tag)
    if not matched and args.exit_code:
        return EXIT_MISS
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    contract = Contract.load(
        args.contract_id, _storage(args), authorizer=_authorizer(args.settings),
    )
    contract.destroy(CallContext(args.caller))
    print(f"Deleted {contract.id}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    contracts = _storage(args).list_contracts()
    if not contracts:
        print("No contracts.")
        return 0
    for c in contracts:
        print(f"{c['id']}  {c['status']}  {c['path']}")
    return 0


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="commitoracle",
        description="Commit-and-verify oracle: store a hashed secret, check guesses",
    )
    parser.add_argument("--storage-dir", help="Directory holding contract state")
    parser.add_argument("--log-level", help="Logging level (default from settings)")
    parser.add_argument("--log-format", choices=["text", "json"], help="Log output format")

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    hash_parser = subparsers.add_parser("hash", help="Print the commitment for a secret")
    hash_parser.add_argument("secret")
    hash_parser.set_defaults(func=cmd_hash)

    for name, func, help_text in (
        ("deploy", cmd_deploy, "Initialize a contract with a commitment"),
        ("set", cmd_set, "Replace the stored commitment"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("contract_id")
        p.add_argument("commitment")
        p.add_argument("--caller", required=True, help="Calling account id")
        p.add_argument(
            "--secret",
            action="store_true",
            help="Treat the value as plaintext and hash it first",
        )
        p.set_defaults(func=func)

    get_parser = subparsers.add_parser("get", help="Show the stored commitment")
    get_parser.add_argument("contract_id")
    get_parser.set_defaults(func=cmd_get)

    guess_parser = subparsers.add_parser("guess", help="Check a guess")
    guess_parser.add_argument("contract_id")
    guess_parser.add_argument("candidate")
    guess_parser.add_argument("--caller", default="anonymous")
    guess_parser.add_argument(
        "--exit-code",
        action="store_true",
        help=f"Exit with status {EXIT_MISS} on a wrong guess",
    )
    guess_parser.set_defaults(func=cmd_guess)

    list_parser = subparsers.add_parser("list", help="List stored contracts")
    list_parser.set_defaults(func=cmd_list)

    delete_parser = subparsers.add_parser(
        "delete", help="Delete a contract's state so it can be deployed again",
    )
    delete_parser.add_argument("contract_id")
    delete_parser.add_argument("--caller", required=True, help="Calling account id")
    delete_parser.set_defaults(func=cmd_delete)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"error: invalid settings: {e}", file=sys.stderr)
        return 1
    overrides = {
        "storage_dir": args.storage_dir,
        "log_level": args.log_level,
        "log_format": args.log_format,
    }
    args.settings = settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    setup_logging(args.settings.log_level, args.settings.log_format)

    try:
        return args.func(args)
    except (OracleError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
