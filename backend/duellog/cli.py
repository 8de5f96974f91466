"""
DuelLog command line

Operator commands that are not exposed over HTTP:

    duellog init-db
    duellog rename-deck OLD NEW
    duellog import-csv FILE [--game-key KEY] [--dry-run]
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from duellog.api.deps import get_current_user_id
from duellog.config import get_settings
from duellog.database import SessionLocal, engine
from duellog.exceptions import DuelLogError
from duellog.services.import_service import ImportService
from duellog.services.maintenance_service import MaintenanceService
from duellog.services.schema_service import ensure_schema

logger = logging.getLogger("duellog.cli")


def init_db(args: argparse.Namespace) -> int:
    report = ensure_schema(engine)
    if report.changed:
        print(f"Applied base migrations: {report.base_applied or '-'}")
        print(f"Applied additive migrations: {report.additive_applied or '-'}")
    else:
        print("Schema is up to date")
    return 0


def rename_deck(args: argparse.Namespace) -> int:
    ensure_schema(engine)
    db = SessionLocal()
    try:
        result = MaintenanceService(db).rename_deck_or_template(args.old, args.new)
    finally:
        db.close()

    print(f"[{result.old_name}] -> [{result.new_name}]")
    for label, count in result.counts.items():
        print(f"  {label}: {count}")
    print(f"Total: {result.total}")
    return 0


def import_csv(args: argparse.Namespace) -> int:
    ensure_schema(engine)
    game_key = args.game_key or get_settings().default_game_key
    db = SessionLocal()
    try:
        user_id = get_current_user_id(db)
        service = ImportService(db, user_id, game_key)
        result = service.import_file(Path(args.file), dry_run=args.dry_run)
    finally:
        db.close()

    verb = "Would import" if args.dry_run else "Imported"
    print(f"{verb} {result.success_count} of {result.total} rows")
    for error in result.errors:
        print(f"  {error}")
    return 0 if result.error_count == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="duellog", description="DuelLog maintenance commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser("init-db", help="Create or upgrade the database schema")
    init.set_defaults(handler=init_db)

    rename = subparsers.add_parser(
        "rename-deck",
        help="Rename a deck name everywhere it is used (templates, main and sub)",
    )
    rename.add_argument("old", help="Current name")
    rename.add_argument("new", help="Replacement name")
    rename.set_defaults(handler=rename_deck)

    importer = subparsers.add_parser("import-csv", help="Import matches from a CSV export")
    importer.add_argument("file", help="Path to the CSV file")
    importer.add_argument(
        "--game-key",
        type=str,
        help="Game the rows belong to. Defaults to DEFAULT_GAME_KEY.",
    )
    importer.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and validate rows without writing to the database",
    )
    importer.set_defaults(handler=import_csv)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (DuelLogError, ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
