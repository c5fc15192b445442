from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Mapping, Optional

from ..protocol.console.loop import ConsoleSession, ConsoleSettings


logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "CONSOLECHESS_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play two-player chess in the terminal")
    parser.add_argument("--white", type=str, default=None, help="White player's name (prompted if omitted)")
    parser.add_argument("--black", type=str, default=None, help="Black player's name (prompted if omitted)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject moves that leave your own king in check",
    )
    parser.add_argument("--ascii", action="store_true", help="Draw pieces as single letters")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    return parser


def settings_from_args(
    args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None
) -> ConsoleSettings:
    env = os.environ if environ is None else environ
    level = args.log_level or env.get(LOG_LEVEL_ENV, "").strip().upper() or "WARNING"
    if level not in LOG_LEVELS:
        raise ValueError(f"invalid log level in {LOG_LEVEL_ENV}: {level!r}")
    return ConsoleSettings(
        white_name=args.white,
        black_name=args.black,
        strict=args.strict,
        ascii_pieces=args.ascii,
        log_level=level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValueError as e:
        parser.error(str(e))
    logging.basicConfig(level=getattr(logging, settings.log_level))

    session = ConsoleSession(input, print, settings)
    try:
        session.run()
    except KeyboardInterrupt:
        print()
        print("Game interrupted.")
        return 130
    except Exception:
        logger.exception("Unhandled error while running the game")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
