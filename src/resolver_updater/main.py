from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from resolver_updater.app import load_settings, run_resolver_updater
from resolver_updater.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Mirror ethscription name ownership onto the ChainHost resolver"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single reconciliation cycle and exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the names that would be updated without sending transactions",
    )
    parser.add_argument(
        "--names-file",
        type=Path,
        help="JSON array of names to track (overrides NAMES_FILE)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        help="Seconds between polls (overrides POLL_INTERVAL)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.interval is not None and parsed_args.interval <= 0:
            raise ConfigurationError("--interval must be positive")  # noqa: TRY301
        settings = load_settings(
            names_file=parsed_args.names_file,
            interval_seconds=parsed_args.interval,
        )
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)

    try:
        run_resolver_updater(settings, once=parsed_args.once, dry_run=parsed_args.dry_run)
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error in resolver updater")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
