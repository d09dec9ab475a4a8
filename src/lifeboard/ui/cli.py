from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from lifeboard.adapters.extraction import JsonFileCandidateSource
from lifeboard.app import build_dashboard, dismiss_item, ingest_source, list_items, reset_items
from lifeboard.config import configure_logging, env_flag, optional_env_var
from lifeboard.domain.errors import RecordNotFoundError
from lifeboard.ui.payloads import dashboard_payload, ingest_result_payload, record_payload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile life-admin items into a dashboard")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output, including HTTP requests",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    owner = argparse.ArgumentParser(add_help=False)
    owner.add_argument(
        "--owner-id",
        type=str,
        help="Owner whose records are read or changed (defaults to LIFEBOARD_OWNER_ID)",
    )

    ingest = subparsers.add_parser(
        "ingest", parents=[owner], help="Ingest one extraction JSON document"
    )
    ingest.add_argument("file", type=str, help="Path to the extraction output")

    subparsers.add_parser("items", parents=[owner], help="List active records")
    subparsers.add_parser("dashboard", parents=[owner], help="Render the dashboard")
    subparsers.add_parser(
        "reset", parents=[owner], help="Retire every active record and clear its sources"
    )

    dismiss = subparsers.add_parser("dismiss", parents=[owner], help="Retire one record")
    dismiss.add_argument("record_id", type=str, help="Id of the record to retire")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _owner_id(args: argparse.Namespace) -> UUID:
    value = args.owner_id or optional_env_var("LIFEBOARD_OWNER_ID")
    if value is None:
        raise ValueError("Missing --owner-id (or LIFEBOARD_OWNER_ID)")
    return _parse_uuid(value)


def _emit(payload: object) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False))
    sys.stdout.write("\n")


def _run(args: argparse.Namespace, owner_id: UUID) -> object:
    if args.command == "ingest":
        result = ingest_source(owner_id, JsonFileCandidateSource(args.file))
        return ingest_result_payload(result)
    if args.command == "items":
        return [record_payload(record) for record in list_items(owner_id)]
    if args.command == "dashboard":
        return dashboard_payload(build_dashboard(owner_id))
    if args.command == "reset":
        return {"retired": reset_items(owner_id)}
    if args.command == "dismiss":
        return record_payload(dismiss_item(owner_id, _parse_uuid(args.record_id)))
    raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    verbose = parsed_args.verbose or env_flag("LIFEBOARD_VERBOSE", default=False)
    configure_logging(level=logging.DEBUG if verbose else logging.INFO, verbose_http=verbose)

    try:
        owner_id = _owner_id(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        payload = _run(parsed_args, owner_id)
    except ValueError:
        # BatchValidationError is a ValueError: nothing was written.
        log.exception("Rejected input")
        sys.exit(2)
    except RecordNotFoundError as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)

    _emit(payload)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    signal(SIGINT, sigint_handler)
    main()
