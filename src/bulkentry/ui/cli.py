from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bulkentry.adapters.csv_rows import InputFileError
from bulkentry.app import upload_time_entries
from bulkentry.config import ConfigurationError, configure_logging, get_upload_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bulk-create Toggl time entries from CSV")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every resolution step",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    upload = subparsers.add_parser("upload", help="Upload time entries from a CSV file")
    upload.add_argument("csv", type=Path, help="Path to the CSV file")
    upload.add_argument(
        "--headers",
        nargs="+",
        help="Explicit column headers; the first CSV line is then treated as data",
    )
    upload.add_argument(
        "--delimiter",
        type=str,
        default=",",
        help="CSV field delimiter (default: %(default)r)",
    )
    upload.add_argument(
        "--rejected",
        type=Path,
        help="Write rejected rows and their reasons to this CSV file",
    )
    upload.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and validate rows without creating any time entries",
    )
    upload.add_argument(
        "--created-with",
        type=str,
        help="Client name reported to Toggl (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if len(args.delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character: {args.delimiter!r}")
    if args.headers is not None and not any(header.strip() for header in args.headers):
        raise ValueError("--headers must name at least one column")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(verbose=parsed_args.verbose)

    try:
        if parsed_args.command != "upload":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        upload_config = get_upload_config()
        if parsed_args.created_with:
            upload_config = replace(upload_config, created_with=parsed_args.created_with)
        summary = upload_time_entries(
            parsed_args.csv,
            headers=parsed_args.headers,
            delimiter=parsed_args.delimiter,
            rejected_path=parsed_args.rejected,
            dry_run=parsed_args.dry_run,
            upload_config=upload_config,
        )
    except (ConfigurationError, InputFileError, ValueError):
        log.exception("Cannot start upload")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during upload")
        sys.exit(1)

    log.info(
        "Upload finished: accepted=%s, rejected=%s, submitted=%s",
        summary.accepted,
        summary.rejected,
        summary.submitted,
    )


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
