# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from designcat.app import (
    build_services,
    diagnose_catalog,
    export_catalog,
    import_catalog_file,
    open_catalog,
    reset_catalog,
)
from designcat.config import configure_logging
from designcat.domain.errors import CatalogSaveError
from designcat.domain.model import Level, Status
from designcat.domain.state import CatalogState
from designcat.domain.transfer import format_import_errors

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from designcat.app import CatalogServices
    from designcat.domain.model import Entry

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the design-system component catalog")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("load", help="Resolve the catalog and report where it came from")

    search = subparsers.add_parser("search", help="Search entries by name, notes or tags")
    search.add_argument("query", nargs="?", default="", help="Case-insensitive search text")
    search.add_argument(
        "--level",
        choices=[level.value for level in Level],
        help="Only show entries of this level",
    )
    search.add_argument(
        "--status",
        choices=[status.value for status in Status],
        help="Only show entries with this status",
    )

    subparsers.add_parser("stats", help="Show catalog counts")

    import_parser = subparsers.add_parser("import", help="Import entries from a JSON file")
    import_parser.add_argument("file", type=str, help="Path of the document to import")
    import_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the document without saving anything",
    )

    export = subparsers.add_parser("export", help="Export the catalog as JSON")
    export.add_argument("--output", "-o", type=str, help="Write to this file instead of stdout")
    export.add_argument(
        "--include-builtins",
        action="store_true",
        help="Include the built-in starter entries",
    )
    export.add_argument(
        "--no-metadata",
        action="store_true",
        help="Leave out the metadata block",
    )

    subparsers.add_parser("reset", help="Forget stored data and reload the starter catalog")

    doctor = subparsers.add_parser("doctor", help="Report storage and data problems")
    doctor.add_argument(
        "--migrate",
        action="store_true",
        help="Re-normalize stored collections before checking",
    )

    return parser.parse_args(list(argv))


def _format_entry(entry: Entry) -> str:
    tags = f" [{', '.join(entry.tags)}]" if entry.tags else ""
    return f"{entry.id:<24} {entry.level.value:<9} {entry.status.value:<6} {entry.name}{tags}"


def _run_load(services: CatalogServices) -> int:
    state = open_catalog(services)
    result = state.last_load
    if result is not None:
        origin = f" ({result.locator})" if result.locator else ""
        print(f"Loaded {result.count} entries from {result.source.value}{origin}")
        if result.error:
            print(f"Warning: {result.error}")
    print(f"{len(state)} entries available")
    return 0


def _run_search(services: CatalogServices, args: argparse.Namespace) -> int:
    state = open_catalog(services)
    narrowed = CatalogState(
        state.filter(
            lambda entry: args.level in (None, entry.level.value)
            and args.status in (None, entry.status.value)
        )
    )
    matches = narrowed.search(args.query)
    for entry in matches:
        print(_format_entry(entry))
    print(f"{len(matches)} of {len(state)} entries")
    return 0


def _run_stats(services: CatalogServices) -> int:
    state = open_catalog(services)
    counts = state.counts
    if counts.is_empty:
        print("Catalog is empty")
        return 0
    percentages = state.level_percentages()
    print(f"Total:      {counts.total}")
    print(f"Atoms:      {counts.atoms} ({percentages[Level.ATOM]}%)")
    print(f"Molecules:  {counts.molecules} ({percentages[Level.MOLECULE]}%)")
    print(f"Organisms:  {counts.organisms} ({percentages[Level.ORGANISM]}%)")
    print(f"Draft:      {counts.draft}")
    print(f"Ready:      {counts.ready}")
    print(f"With notes: {counts.with_notes}")
    print(f"With tags:  {counts.with_tags}")
    print(f"With deps:  {counts.with_dependencies}")
    return 0


def _run_import(services: CatalogServices, args: argparse.Namespace) -> int:
    result = import_catalog_file(args.file, services=services, dry_run=args.dry_run)
    print(format_import_errors(result))
    if not result.is_valid:
        return 1
    if args.dry_run:
        print("Dry run: nothing was saved")
    else:
        print(f"Imported {len(result.entries)} entries")
    return 0


def _run_export(services: CatalogServices, args: argparse.Namespace) -> int:
    text = export_catalog(
        services,
        include_builtins=args.include_builtins,
        include_metadata=not args.no_metadata,
        output=args.output,
    )
    if args.output is None:
        print(text)
    return 0


def _run_reset(services: CatalogServices) -> int:
    result = reset_catalog(services)
    print(f"Reloaded {result.count} entries from {result.source.value}")
    return 0


def _run_doctor(services: CatalogServices, args: argparse.Namespace) -> int:
    report = diagnose_catalog(services, migrate=args.migrate)
    print(f"Storage keys: {len(report.usage.keys)} ({report.usage.size} bytes)")
    for name in report.migrated:
        print(f"Migrated {name}")
    for record in report.malformed:
        print(f"Malformed #{record.index} {record.id}: {'; '.join(record.issues)}")
    for entry_id, dependency in report.broken_dependencies:
        print(f"Broken dependency: {entry_id} -> {dependency}")
    if not report.malformed and not report.broken_dependencies:
        print("No problems found")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.WARNING)

    try:
        services = build_services()
        if parsed_args.command == "load":
            code = _run_load(services)
        elif parsed_args.command == "search":
            code = _run_search(services, parsed_args)
        elif parsed_args.command == "stats":
            code = _run_stats(services)
        elif parsed_args.command == "import":
            code = _run_import(services, parsed_args)
        elif parsed_args.command == "export":
            code = _run_export(services, parsed_args)
        elif parsed_args.command == "reset":
            code = _run_reset(services)
        elif parsed_args.command == "doctor":
            code = _run_doctor(services, parsed_args)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except CatalogSaveError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)

    if code:
        sys.exit(code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
