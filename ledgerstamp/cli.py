"""
Command-line entrypoint: ledgerstamp <command> [args...].

  ledgerstamp hash FILE...                  print SHA-256 of each file
  ledgerstamp submit FILE...                submit each file's hash
  ledgerstamp status HASH [--ledger L]      show anchoring state on one ledger

Exit: 0 ok/confirmed, 1 not confirmed, 2 usage or credential, 3 network.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import config
from ._version import __version__
from .client import TimestampClient
from .digest import sha256_file
from .errors import InvalidCredential, NetworkError
from .models import Ledger, TimestampState

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_CONFIRMED = 1
EXIT_USAGE = 2
EXIT_NETWORK = 3


def _parse_ledger(value: str) -> int:
    """Accept a ledger name (bitcoin, ethereum) or a raw integer code."""
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return int(Ledger[value.upper()])
    except KeyError:
        names = ", ".join(m.name.lower() for m in Ledger)
        raise argparse.ArgumentTypeError(f"unknown ledger {value!r} (known: {names}, or an integer code)")


def _ledger_label(code: int) -> str:
    try:
        return Ledger(code).name.lower()
    except ValueError:
        return str(code)


def _make_client(args: argparse.Namespace) -> Optional[TimestampClient]:
    key = args.api_key or config.api_key()
    if not key:
        print("No API key: pass --api-key or set LEDGERSTAMP_API_KEY", file=sys.stderr)
        return None
    try:
        return TimestampClient(key)
    except InvalidCredential as exc:
        print(f"Invalid API key: {exc}", file=sys.stderr)
        return None


def _cmd_hash(args: argparse.Namespace) -> int:
    for path in args.files:
        print(f"{sha256_file(path)}  {path}")
    return EXIT_OK


def _cmd_submit(args: argparse.Namespace) -> int:
    client = _make_client(args)
    if client is None:
        return EXIT_USAGE
    for path in args.files:
        digest = client.submit_hash(sha256_file(path))
        print(f"{digest}  {path}")
    return EXIT_OK


def _cmd_status(args: argparse.Namespace) -> int:
    client = _make_client(args)
    if client is None:
        return EXIT_USAGE
    result = client.timestamp_state(args.ledger, args.hash)
    label = _ledger_label(args.ledger)
    if result.state == TimestampState.CONFIRMED:
        print(f"{args.hash}  {label}  CONFIRMED  {result.confirmed_at.isoformat()}")
        if result.entry is not None and result.entry.transaction:
            print(f"  transaction: {result.entry.transaction}")
        return EXIT_OK
    print(f"{args.hash}  {label}  {result.state.value}")
    return EXIT_NOT_CONFIRMED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledgerstamp",
        description="Blockchain timestamping client (submits SHA-256 digests only)",
    )
    parser.add_argument("--version", action="version", version=f"ledgerstamp {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    subparsers = parser.add_subparsers(dest="command", help="command")

    p_hash = subparsers.add_parser("hash", help="Print SHA-256 of files")
    p_hash.add_argument("files", nargs="+", metavar="FILE")
    p_hash.set_defaults(func=_cmd_hash)

    p_submit = subparsers.add_parser("submit", help="Submit file hashes for timestamping")
    p_submit.add_argument("files", nargs="+", metavar="FILE")
    p_submit.add_argument("--api-key", default=None, help="API key (default: config / LEDGERSTAMP_API_KEY)")
    p_submit.set_defaults(func=_cmd_submit)

    p_status = subparsers.add_parser("status", help="Show timestamp state of a hash on one ledger")
    p_status.add_argument("hash", metavar="HASH")
    p_status.add_argument(
        "--ledger",
        type=_parse_ledger,
        default=int(Ledger.BITCOIN),
        help="bitcoin, ethereum or an integer code (default: bitcoin)",
    )
    p_status.add_argument("--api-key", default=None, help="API key (default: config / LEDGERSTAMP_API_KEY)")
    p_status.set_defaults(func=_cmd_status)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        return args.func(args)
    except NetworkError as exc:
        logger.debug("network failure", exc_info=True)
        print(f"Network error: {exc}", file=sys.stderr)
        return EXIT_NETWORK
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
