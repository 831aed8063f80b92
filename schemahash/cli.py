"""
schemahash - Command Line Interface

Usage:
    schemahash <password> [<schema>]                 # print a new hash
    schemahash <password> --verify '<hash>'          # check a stored hash
    schemahash -- '-starts-with-dash' [<schema>]     # '--' ends option parsing
    python -m schemahash ...                         # same thing

Environment:
    SCHEMAHASH_SCHEMA      Schema used when none is given on the command line
    SCHEMAHASH_LOG_LEVEL   Logging level (default WARNING)
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional

from cryptography.exceptions import UnsupportedAlgorithm

from .errors import HashError
from .hasher import DEFAULT_SCHEMA, create, verify


_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: str) -> None:
    """Configure process logging with consistent format and runtime level."""

    normalized_level = level.strip().upper() if level.strip() else "WARNING"
    resolved_level = getattr(logging, normalized_level, logging.WARNING)

    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemahash",
        description="Create or verify self-describing password hashes.",
        epilog="Put -- before a password that starts with '-', e.g. schemahash -- -secret PLAIN",
    )
    parser.add_argument("password", help="plaintext password")
    parser.add_argument(
        "schema",
        nargs="?",
        default=os.environ.get("SCHEMAHASH_SCHEMA", DEFAULT_SCHEMA),
        help=f"hash schema (default: {DEFAULT_SCHEMA})",
    )
    parser.add_argument(
        "--verify",
        metavar="HASH",
        help="verify PASSWORD against HASH instead of creating a new hash",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("SCHEMAHASH_LOG_LEVEL", "WARNING"),
        help="logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    try:
        if args.verify is not None:
            ok = asyncio.run(verify(args.password, args.verify))
            print("OK" if ok else "FAIL")
            return 0 if ok else 1

        print(asyncio.run(create(args.password, args.schema)))
        return 0
    except (HashError, UnsupportedAlgorithm) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
