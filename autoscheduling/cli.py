"""Command-line interface for the auto-scheduling engine."""

from __future__ import annotations

import argparse
import json
import logging

from autoscheduling.config import DEFAULT_DB_URL, load_config
from autoscheduling.domain.db import get_session, init_database
from autoscheduling.engine.auto_scheduler import AutoSchedulingEngine, persist_schedule
from autoscheduling.events import EventBus
from autoscheduling.io.export_csv import export_schedule_csv, export_stored_schedule_csv
from autoscheduling.io.import_csv import (
    import_availability_csv,
    import_employees_csv,
    import_requirements_csv,
)
from autoscheduling.logger import setup_logging
from autoscheduling.services.loaders import DatabaseAvailabilityLoader, DatabaseRequirementLoader
from autoscheduling.services.metrics import conflicts_as_records, metrics_as_dict
from autoscheduling.services.validation import summarize_schedule


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = args.db or DEFAULT_DB_URL
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    db_url = args.db or DEFAULT_DB_URL
    session = get_session(db_url)

    try:
        if args.employees:
            count = import_employees_csv(session, args.employees)
            print(f"[OK] Imported {count} employees")

        if args.availability:
            count = import_availability_csv(session, args.availability)
            print(f"[OK] Imported {count} availability windows")

        if args.requirements:
            count = import_requirements_csv(session, args.requirements, args.start, args.end)
            print(f"[OK] Imported {count} shift requirements")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate a schedule for a date range."""
    cfg = load_config(args.config)
    db_url = args.db or cfg.db_url
    session = get_session(db_url)

    try:
        engine = AutoSchedulingEngine(
            DatabaseRequirementLoader(session),
            DatabaseAvailabilityLoader(session),
            config=cfg,
            event_bus=EventBus(),
        )
        solution = engine.generate(args.start, args.end)

        if args.persist:
            count = persist_schedule(session, solution.schedule, args.start, args.end)
            print(f"[OK] Persisted {count} shifts")

        if args.out:
            export_schedule_csv(solution.schedule, args.out)
            print(f"[OK] Exported schedule to {args.out}")

        if args.json:
            report = {
                "success": solution.success,
                "metrics": metrics_as_dict(solution.metrics),
                "conflicts": conflicts_as_records(solution.conflicts),
                "recommendations": solution.recommendations,
            }
            print(json.dumps(report, indent=2, default=str))
        else:
            print(summarize_schedule(solution.schedule))
            for conflict in solution.conflicts:
                print(f"  [{conflict.severity.upper()}] {conflict.type}: {conflict.message}")
            for rec in solution.recommendations:
                print(f"  - {rec}")

        session.close()
        status = "OK" if solution.success else "WARN"
        print(
            f"[{status}] Generated {solution.metrics.total_shifts} shifts for {args.start}..{args.end} "
            f"(coverage {solution.metrics.coverage_rate:.1f}%, {len(solution.conflicts)} conflicts)"
        )

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Generation failed: {e}")
        raise


def _cmd_export(args: argparse.Namespace) -> None:
    """Export stored schedule from database to CSV."""
    db_url = args.db or DEFAULT_DB_URL
    session = get_session(db_url)

    try:
        count = export_stored_schedule_csv(session, args.out, args.start, args.end)
        session.close()
        print(f"[OK] Exported {count} shifts to {args.out}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autoscheduling",
        description="Auto-scheduling engine for shift rosters",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL (default: {DEFAULT_DB_URL})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--employees", help="Path to employees CSV")
    imp.add_argument("--availability", help="Path to availability windows CSV")
    imp.add_argument("--requirements", help="Path to shift requirements CSV")
    imp.add_argument("--start", help="Only import requirements on or after this date (YYYY-MM-DD)")
    imp.add_argument("--end", help="Only import requirements on or before this date (YYYY-MM-DD)")
    imp.set_defaults(func=_cmd_import_csv)

    # generate command
    gen = sub.add_parser("generate", help="Generate schedule for a date range")
    gen.add_argument("--start", required=True, help="First date (YYYY-MM-DD)")
    gen.add_argument("--end", required=True, help="Last date (YYYY-MM-DD)")
    gen.add_argument("--config", help="Path to config YAML or JSON (defaults when omitted)")
    gen.add_argument("--out", help="Optional: export generated schedule to CSV")
    gen.add_argument("--persist", action="store_true", help="Replace stored shifts in the range")
    gen.add_argument("--json", action="store_true", help="Print metrics, conflicts and recommendations as JSON")
    gen.set_defaults(func=_cmd_generate)

    # export command
    exp = sub.add_parser("export", help="Export stored schedule to CSV")
    exp.add_argument("--start", required=True, help="First date (YYYY-MM-DD)")
    exp.add_argument("--end", required=True, help="Last date (YYYY-MM-DD)")
    exp.add_argument("--out", required=True, help="Path to output CSV")
    exp.set_defaults(func=_cmd_export)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)
    args.func(args)


if __name__ == "__main__":
    main()
