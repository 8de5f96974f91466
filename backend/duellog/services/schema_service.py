"""
Schema Bootstrap Service

Brings a store to the latest schema at startup:
1. a fresh store gets the ordered base migration scripts, each in its own
   transaction
2. every store then gets the additive migrations it is missing
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from duellog.exceptions import BootstrapError

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"

BASE_MIGRATIONS = [
    "001_create_schema.sql",
    "002_add_deck_theme.sql",
    "003_add_match_mode.sql",
]

# Presence of this table marks a store as already bootstrapped
CORE_TABLE = "matches"


@dataclass
class AdditiveMigration:
    """A column or index added to stores created by older schema versions"""
    name: str
    table: str
    statement: str
    column: Optional[str] = None
    index: Optional[str] = None

    def is_applied(self, conn: Connection) -> bool:
        inspector = inspect(conn)
        if self.column is not None:
            return self.column in {c["name"] for c in inspector.get_columns(self.table)}
        return self.index in {i["name"] for i in inspector.get_indexes(self.table)}


ADDITIVE_MIGRATIONS = [
    AdditiveMigration(
        name="matches.mode",
        table="matches",
        column="mode",
        statement=(
            "ALTER TABLE matches ADD COLUMN mode TEXT NOT NULL DEFAULT 'Ranked' "
            "CHECK (mode IN ('Ranked','Rating','DC'))"
        ),
    ),
    AdditiveMigration(
        name="idx_matches_mode",
        table="matches",
        index="idx_matches_mode",
        statement="CREATE INDEX IF NOT EXISTS idx_matches_mode ON matches(mode)",
    ),
]


@dataclass
class BootstrapReport:
    """What a bootstrap run changed"""
    base_applied: List[str] = field(default_factory=list)
    additive_applied: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.base_applied or self.additive_applied)


def split_sql_script(script: str) -> List[str]:
    """
    Split a migration script into statements.

    Full-line "--" comments are dropped; statements end with ";".
    Migration assets must not contain ";" inside string literals.
    """
    lines = [
        line for line in script.splitlines()
        if not line.strip().startswith("--")
    ]
    return [s.strip() for s in "\n".join(lines).split(";") if s.strip()]


class SchemaBootstrapper:
    """Applies base and additive migrations against one engine"""

    def __init__(
        self,
        engine: Engine,
        migrations_dir: Path = MIGRATIONS_DIR,
        base_migrations: Optional[List[str]] = None,
        additive_migrations: Optional[List[AdditiveMigration]] = None,
        reader: Optional[Callable[[Path], str]] = None,
    ):
        self.engine = engine
        self.migrations_dir = migrations_dir
        self.base_migrations = base_migrations if base_migrations is not None else BASE_MIGRATIONS
        self.additive_migrations = (
            additive_migrations if additive_migrations is not None else ADDITIVE_MIGRATIONS
        )
        self._read = reader or (lambda path: path.read_text(encoding="utf-8"))

    def ensure_schema(self) -> BootstrapReport:
        """Idempotent: safe on empty, older and current stores"""
        report = BootstrapReport()

        if not self.table_exists(CORE_TABLE):
            logger.info("Database is empty; applying base schema migrations")
            report.base_applied = self.apply_base_migrations()
            logger.info("Base schema is ready (%d migrations)", len(report.base_applied))

        report.additive_applied = self.apply_additive_migrations()
        if not report.changed:
            logger.info("Schema is up to date")
        return report

    def table_exists(self, table: str) -> bool:
        try:
            with self.engine.connect() as conn:
                return inspect(conn).has_table(table)
        except SQLAlchemyError as e:
            raise BootstrapError(f"cannot inspect schema: {e}", step="inspect") from e

    def read_migration(self, filename: str) -> str:
        path = self.migrations_dir / filename
        try:
            return self._read(path)
        except OSError as e:
            raise BootstrapError(f"read migration {path}: {e}", step=filename) from e

    def apply_base_migrations(self) -> List[str]:
        """Run every base script in listed order; the first failure is fatal"""
        applied = []
        for filename in self.base_migrations:
            statements = split_sql_script(self.read_migration(filename))
            try:
                with self.engine.begin() as conn:
                    for statement in statements:
                        conn.exec_driver_sql(statement)
            except SQLAlchemyError as e:
                raise BootstrapError(f"exec {filename}: {e}", step=filename) from e
            logger.info("Applied base migration %s", filename)
            applied.append(filename)
        return applied

    def apply_additive_migrations(self) -> List[str]:
        """Apply each known additive migration that is not yet present"""
        applied = []
        for migration in self.additive_migrations:
            try:
                with self.engine.begin() as conn:
                    if migration.is_applied(conn):
                        continue
                    conn.exec_driver_sql(migration.statement)
            except SQLAlchemyError as e:
                raise BootstrapError(f"add {migration.name}: {e}", step=migration.name) from e
            logger.info("Applied runtime migration: %s", migration.name)
            applied.append(migration.name)
        return applied


def ensure_schema(engine: Engine) -> BootstrapReport:
    """Bootstrap the schema of `engine` with the bundled migrations"""
    return SchemaBootstrapper(engine).ensure_schema()
