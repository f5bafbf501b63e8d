from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import TypeAdapter

from travelsync.adapters.files import JsonDocumentSource, load_document
from travelsync.app import import_profiles, migrate, parse_reservation
from travelsync.config import (
    ConfigurationError,
    configure_logging,
    get_import_context,
    get_sync_config,
)
from travelsync.config.logging import parse_log_level
from travelsync.config.sync import SyncConfig
from travelsync.domain.model import CanonicalReservation
from travelsync.domain.validation import ValidationReport

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_RESERVATION_JSON = TypeAdapter(CanonicalReservation)
_VALIDATION_JSON = TypeAdapter(ValidationReport)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError("Value must be at least 1")
    return parsed


def _log_level(value: str) -> int:
    try:
        return parse_log_level(value)
    except ConfigurationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import Sabre traveler data")
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=None,
        help="Logging level name or number (defaults to TRAVELSYNC_LOG_LEVEL, then INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    profiles = subparsers.add_parser("import-profiles", help="Import Sabre traveler profiles")
    profiles.add_argument(
        "path",
        type=Path,
        help="JSON array or JSON-lines file of raw profile documents",
    )
    profiles.add_argument(
        "--max-concurrency",
        type=_positive_int,
        default=None,
        help="Maximum number of profiles imported at once (defaults to config)",
    )
    profiles.add_argument(
        "--organization-id",
        type=str,
        help="Organization owning the imported profiles (defaults to config)",
    )

    reservation = subparsers.add_parser(
        "parse-reservation",
        help="Print the canonical form of a Sabre GetReservation document",
    )
    reservation.add_argument("path", type=Path, help="Raw reservation document (JSON)")
    reservation.add_argument(
        "--validate-only",
        action="store_true",
        help="Print only the seat validation report",
    )

    subparsers.add_parser("migrate", help="Upgrade the database schema to the latest revision")

    return parser.parse_args(list(argv))


def _write(payload: bytes) -> None:
    sys.stdout.write(payload.decode("utf-8"))
    sys.stdout.write("\n")


def _import_profiles(args: argparse.Namespace) -> int:
    sync = get_sync_config()
    if args.max_concurrency is not None:
        sync = SyncConfig(max_concurrent_profiles=args.max_concurrency, source=sync.source)
    context = get_import_context(organization_id=args.organization_id, sync=sync)
    summary = import_profiles(JsonDocumentSource(args.path), context=context)
    for source_id, error in summary.failures.items():
        log.error("Profile %s failed: %s", source_id, error)
    return 1 if summary.failed and not summary.results else 0


def _parse_reservation(args: argparse.Namespace) -> int:
    report = parse_reservation(load_document(args.path))
    if args.validate_only:
        _write(_VALIDATION_JSON.dump_json(report.validation, indent=2))
    else:
        _write(_RESERVATION_JSON.dump_json(report.reservation, indent=2))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    try:
        configure_logging(level=parsed_args.log_level)
    except ConfigurationError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.exit(2)
    try:
        if hasattr(parsed_args, "path") and not parsed_args.path.is_file():
            raise ValueError(f"No such file: {parsed_args.path}")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "import-profiles":
            exit_code = _import_profiles(parsed_args)
        elif parsed_args.command == "parse-reservation":
            exit_code = _parse_reservation(parsed_args)
        elif parsed_args.command == "migrate":
            migrate()
            exit_code = 0
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
