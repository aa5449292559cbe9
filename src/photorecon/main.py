#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from photorecon.adapters.signals import parse_signals
from photorecon.adapters.sqlalchemy.unit_of_work import (
    configured_engine,
    is_started,
    startup,
)
from photorecon.app import (
    approve_photo,
    archive_photo,
    create_photo,
    favorite_photo,
    get_photo,
    purge_photo,
    reconcile_photo,
    restore_photo,
)
from photorecon.config import configure_logging
from photorecon.domain.reconciliation import review_status

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import FrameType

    from photorecon.domain.model import Photo
    from photorecon.domain.reconciliation import ReconcileResult, Signals

log = logging.getLogger(__name__)

_TRANSITIONS: dict[str, Callable[[UUID], ReconcileResult]] = {
    "archive": archive_photo,
    "restore": restore_photo,
    "purge": purge_photo,
    "approve": approve_photo,
    "favorite": lambda photo_id: favorite_photo(photo_id, favorite=True),
    "unfavorite": lambda photo_id: favorite_photo(photo_id, favorite=False),
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile photo metadata")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the database tables")

    create = subparsers.add_parser("create", help="Create a photo record")
    create.add_argument("--name", type=str, default="", help="File name of the photo")
    create.add_argument("--path", type=str, default="", help="Directory of the photo")
    create.add_argument(
        "--original-name",
        type=str,
        default="",
        help="Original file name before import",
    )

    reconcile = subparsers.add_parser("reconcile", help="Apply a JSON signal batch to a photo")
    reconcile.add_argument("photo_id", type=str, help="Photo id")
    reconcile.add_argument(
        "signals",
        type=str,
        help="Path to a JSON signal batch, or - to read it from stdin",
    )

    for command, help_text in (
        ("archive", "Archive a photo (soft delete)"),
        ("restore", "Restore an archived photo"),
        ("purge", "Delete a photo and its associations permanently"),
        ("approve", "Approve a photo in review"),
        ("favorite", "Mark a photo as favorite"),
        ("unfavorite", "Remove the favorite flag"),
        ("show", "Print a photo record as JSON"),
    ):
        transition = subparsers.add_parser(command, help=help_text)
        transition.add_argument("photo_id", type=str, help="Photo id")

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _read_signals(source: str) -> Signals:
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return parse_signals(raw)


def _describe(photo: Photo) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "title": photo.title,
        "title_source": photo.title_source.value,
        "description": photo.description,
        "taken_at": photo.taken_at.isoformat() if photo.taken_at else None,
        "taken_at_local": photo.taken_at_local.isoformat() if photo.taken_at_local else None,
        "time_zone": photo.time_zone,
        "taken_source": photo.taken_source.value,
        "date": [photo.year, photo.month, photo.day],
        "location": [photo.latitude, photo.longitude, photo.altitude],
        "location_source": photo.location_source.value,
        "cell": photo.cell.id,
        "place": photo.place.id,
        "camera": photo.camera.name,
        "lens": photo.lens.name,
        "keywords": photo.details.keywords,
        "labels": [label.name for label in photo.labels],
        "favorite": photo.favorite,
        "quality": photo.quality,
        "status": review_status(photo).value,
    }


def _print_photo(photo: Photo) -> None:
    print(json.dumps(_describe(photo), indent=2, ensure_ascii=False))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    photo_id: UUID | None = None
    signals: Signals | None = None
    try:
        parsed_args = _parse_args(args_list)
        if hasattr(parsed_args, "photo_id"):
            photo_id = _parse_uuid(parsed_args.photo_id)
        if parsed_args.command == "reconcile":
            signals = _read_signals(parsed_args.signals)
    except (ValueError, OSError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "init-db":
            if not is_started():
                startup()
            log.info("Database ready: %s", configured_engine())
        elif parsed_args.command == "create":
            photo = create_photo(
                name=parsed_args.name,
                path=parsed_args.path,
                original_name=parsed_args.original_name,
            )
            _print_photo(photo)
        elif parsed_args.command == "reconcile" and photo_id is not None and signals is not None:
            result = reconcile_photo(photo_id, signals)
            _print_photo(result.photo)
        elif parsed_args.command == "show" and photo_id is not None:
            _print_photo(get_photo(photo_id))
        elif parsed_args.command in _TRANSITIONS and photo_id is not None:
            result = _TRANSITIONS[parsed_args.command](photo_id)
            log.info(
                "%s %s: status=%s",
                parsed_args.command,
                photo_id,
                review_status(result.photo).value,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
