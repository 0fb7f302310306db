"""Command-line interface for decoding and storing .sch schedules."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

from amion_sch.config import load_config
from amion_sch.domain.db import DEFAULT_DB_URL, init_database, session_scope
from amion_sch.domain.repositories import AssignmentRepository, ImportRepository
from amion_sch.engine.orchestrator import AmionParser
from amion_sch.exceptions import EXIT_CODES, ConfigError
from amion_sch.io.export_csv import export_schedule_csv, export_staff_csv
from amion_sch.io.import_db import store_parse_result
from amion_sch.io.reader import read_document
from amion_sch.logger import configure_logging
from amion_sch.services.queries import parse_stats
from amion_sch.validator import summarize_result, validate_parse_result


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}' (expected YYYY-MM-DD)") from e


def _parse_file(args: argparse.Namespace):
    """Load config, apply command-line overrides, and decode args.file."""
    cfg = load_config(args.config)
    if args.reference_date is not None:
        cfg.calendar.reference_date = args.reference_date
    if args.strategy:
        cfg.calendar.strategy = args.strategy
        if args.strategy == "anchor_start" and cfg.calendar.reference_date is None:
            raise ConfigError("--strategy anchor_start requires --reference-date")

    document = read_document(args.file)
    return AmionParser(cfg).parse(document)


def _cmd_decode(args: argparse.Namespace) -> None:
    """Decode a .sch file and optionally export CSV."""
    result = _parse_file(args)
    print(
        f"[OK] Decoded {args.file}: {len(result.staff)} staff, {len(result.services)} services, "
        f"{len(result.schedule)} assignments"
    )
    if result.start_date is not None:
        print(f"[INFO] Schedule dates: {result.start_date} .. {result.end_date}")

    if args.validate:
        validate_parse_result(result)
        print("[OK] Validation passed.")

    if args.out:
        count = export_schedule_csv(result, args.out)
        print(f"[OK] Exported {count} assignments to {args.out}")

    if args.staff_out:
        count = export_staff_csv(result, args.staff_out)
        print(f"[OK] Exported {count} staff to {args.staff_out}")

    for warning in result.warnings:
        print(f"[WARN] {warning.message}")


def _cmd_summarize(args: argparse.Namespace) -> None:
    """Print a summary of a decoded .sch file."""
    result = _parse_file(args)
    stats = parse_stats(result)

    print(f"File: {args.file}")
    if result.metadata.site_id:
        print(f"Site: {result.metadata.site_id}")
    if result.metadata.year_range:
        print(f"Years: {result.metadata.year_range}")
    print(
        f"Providers: {stats['valid_providers']} of {stats['total_staff']} staff "
        f"({stats['with_cell_phone']} with cell, {stats['with_pager']} with pager)"
    )
    for role, count in sorted(stats["by_role"].items()):
        print(f"  {role}: {count}")
    print(
        f"Days: {stats['assignments']} total, {stats['empty_days']} empty, "
        f"{stats['unresolved_days']} unresolved, {stats['patched_days']} patched"
    )
    print()
    print(summarize_result(result))


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = args.db or DEFAULT_DB_URL
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_db(args: argparse.Namespace) -> None:
    """Decode a .sch file and store it as the active import."""
    db_url = args.db or DEFAULT_DB_URL
    result = _parse_file(args)

    init_database(db_url)
    with session_scope(db_url) as session:
        schedule_import = store_parse_result(session, result, source_file=Path(args.file).name)
    print(
        f"[OK] Stored import {schedule_import.id}: {len(result.staff)} staff, "
        f"{len(result.schedule)} assignments"
    )


def _cmd_query(args: argparse.Namespace) -> None:
    """List stored assignments of the active import."""
    if args.end < args.start:
        raise ConfigError(f"--end {args.end} is before --start {args.start}")

    db_url = args.db or DEFAULT_DB_URL
    with session_scope(db_url) as session:
        active = ImportRepository.get_active(session)
        if active is None:
            print("[ERROR] No active import; run import-db first")
            return

        if args.staff_id is not None:
            rows = [
                a
                for a in AssignmentRepository.get_by_staff(session, active.id, args.staff_id)
                if args.start <= a.date <= args.end
            ]
        else:
            rows = AssignmentRepository.get_by_date_range(
                session, active.id, args.start, args.end, service_name=args.service
            )

        for a in rows:
            if a.is_empty:
                who = "-"
            else:
                who = a.primary_staff_name or f"#{a.primary_staff_id}"
            if a.secondary_staff_id is not None:
                who += f" / {a.secondary_staff_name or f'#{a.secondary_staff_id}'}"
            print(f"{a.date.isoformat()}  {a.service_name:<30}  {who}")
        print(f"[OK] {len(rows)} assignments")


def _add_decode_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("file", help="Path to the .sch file")
    p.add_argument("--config", help="Path to decoder config (JSON or YAML)")
    p.add_argument("--reference-date", type=_iso_date, help="Anchor date for the schedule (YYYY-MM-DD)")
    p.add_argument(
        "--strategy",
        choices=["anchor_end", "anchor_start", "header_week"],
        help="Date strategy (overrides the config file)",
    )


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="amion-sch",
        description="Decode Amion .sch on-call schedule files",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    # decode command
    dec = sub.add_parser("decode", help="Decode a .sch file")
    _add_decode_options(dec)
    dec.add_argument("--out", help="Optional: export assignments to CSV")
    dec.add_argument("--staff-out", help="Optional: export staff to CSV")
    dec.add_argument("--validate", action="store_true", help="Check decoded invariants before exporting")
    dec.set_defaults(func=_cmd_decode)

    # summarize command
    summ = sub.add_parser("summarize", help="Print a summary of a .sch file")
    _add_decode_options(summ)
    summ.set_defaults(func=_cmd_summarize)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # import-db command
    imp = sub.add_parser("import-db", help="Decode a .sch file and store it in the database")
    _add_decode_options(imp)
    imp.set_defaults(func=_cmd_import_db)

    # query command
    qry = sub.add_parser("query", help="List stored assignments in a date range")
    qry.add_argument("--start", required=True, type=_iso_date, help="First date (YYYY-MM-DD)")
    qry.add_argument("--end", required=True, type=_iso_date, help="Last date (YYYY-MM-DD)")
    qry.add_argument("--staff-id", type=int, help="Only days for this staff sequence id")
    qry.add_argument("--service", help="Only this service name")
    qry.set_defaults(func=_cmd_query)

    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "INFO")

    try:
        args.func(args)
    except tuple(EXIT_CODES) as e:
        print(f"[ERROR] {e}")
        sys.exit(next(code for exc, code in EXIT_CODES.items() if isinstance(e, exc)))


if __name__ == "__main__":
    main()
