"""Schema registry and migration runner for the collected events table.

The schema version is kept in ``PRAGMA user_version``; every applied step is
also recorded in ``schema_migrations`` so a step never runs twice. Steps are
additive only: historical rows must stay readable by every later version.
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Set, Tuple

from infrastructure.logging import get_module_logger
from modules.datacollection.exceptions import MigrationError
from modules.datacollection.models import TIMESTAMP_FORMAT

logger = get_module_logger()

EVENTS_TABLE = "collected_events"
MIGRATIONS_TABLE = "schema_migrations"


@dataclass(frozen=True)
class Migration:
    """One schema step, taking the table from ``version - 1`` to ``version``."""

    version: int
    description: str
    statements: Tuple[str, ...]


MIGRATIONS: Tuple[Migration, ...] = (
    Migration(
        version=1,
        description="create collected events table",
        statements=(
            f"""
            CREATE TABLE IF NOT EXISTS {EVENTS_TABLE} (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              event_kind INTEGER NOT NULL,
              subject TEXT NOT NULL,
              state TEXT NOT NULL,
              created_at TEXT NOT NULL
            )
            """,
        ),
    ),
    Migration(
        version=2,
        description="index events by kind and subject",
        statements=(
            f"CREATE INDEX IF NOT EXISTS idx_{EVENTS_TABLE}_kind_subject "
            f"ON {EVENTS_TABLE}(event_kind, subject)",
        ),
    ),
)


def validate_registry(migrations: Sequence[Migration] = MIGRATIONS) -> None:
    """Check that registered versions run 1, 2, 3, ... without gaps.

    Raises:
        MigrationError: If the registry is empty or not contiguous.
    """
    if not migrations:
        raise MigrationError(0, None, "no migrations registered")
    for expected, migration in enumerate(migrations, start=1):
        if migration.version != expected:
            raise MigrationError(
                expected - 1,
                migration.version,
                f"registry out of order: expected v{expected}, found v{migration.version}",
            )


def latest_version(migrations: Sequence[Migration] = MIGRATIONS) -> int:
    """Highest registered schema version."""
    validate_registry(migrations)
    return migrations[-1].version


def plan_migrations(
    stored_version: int,
    target_version: Optional[int] = None,
    migrations: Sequence[Migration] = MIGRATIONS,
) -> List[Migration]:
    """Ordered steps needed to go from ``stored_version`` to ``target_version``.

    Args:
        stored_version: Version currently persisted (0 for a new database).
        target_version: Desired version, latest registered when None.
        migrations: Registry to plan from.

    Returns:
        Steps with ``stored_version < version <= target_version``, in order.
        Empty when the stored version is already the target.

    Raises:
        MigrationError: If the target is not registered or lower than the
            stored version.
    """
    newest = latest_version(migrations)
    target = newest if target_version is None else target_version

    if target < 1 or target > newest:
        raise MigrationError(
            stored_version, target, f"target version not registered (latest is v{newest})"
        )
    if stored_version > target:
        raise MigrationError(stored_version, target, "downgrade is not supported")

    return [m for m in migrations if stored_version < m.version <= target]


def ensure_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {MIGRATIONS_TABLE} (
          version INTEGER PRIMARY KEY,
          description TEXT NOT NULL,
          applied_at TEXT NOT NULL
        )
        """
    )


def get_stored_version(conn: sqlite3.Connection) -> int:
    """Schema version persisted in the database (0 when new)."""
    row = conn.execute("PRAGMA user_version").fetchone()
    return int(row[0]) if row else 0


def get_applied_versions(conn: sqlite3.Connection) -> Set[int]:
    """Versions recorded in the migration run table."""
    rows = conn.execute(f"SELECT version FROM {MIGRATIONS_TABLE}").fetchall()
    return {int(row[0]) for row in rows}


def apply_migrations(
    conn: sqlite3.Connection,
    target_version: Optional[int] = None,
    migrations: Sequence[Migration] = MIGRATIONS,
    clock: Callable[[], datetime] = datetime.now,
) -> List[int]:
    """Bring the database schema up to ``target_version``.

    Each step runs in its own transaction together with its run record and the
    version bump, so a failed step leaves the previous version intact.
    The connection must be in autocommit mode (``isolation_level=None``).

    Args:
        conn: Open connection in autocommit mode.
        target_version: Desired version, latest registered when None.
        migrations: Registry to apply from.
        clock: Source of the ``applied_at`` timestamp.

    Returns:
        Versions applied by this call, in order (empty when up to date).

    Raises:
        MigrationError: If planning fails or a step cannot be applied.
    """
    try:
        ensure_migrations_table(conn)
        stored_version = get_stored_version(conn)
        applied = get_applied_versions(conn)
    except sqlite3.Error as e:
        raise MigrationError(0, target_version, f"cannot read schema metadata: {e}") from e

    plan = plan_migrations(stored_version, target_version, migrations)
    applied_now: List[int] = []

    for migration in plan:
        if migration.version in applied:
            # Run record without the version bump: finish the bump only.
            logger.warning(
                "migration_already_recorded",
                version=migration.version,
                stored_version=stored_version,
            )
            try:
                conn.execute(f"PRAGMA user_version = {int(migration.version)}")
            except sqlite3.Error as e:
                raise MigrationError(stored_version, migration.version, str(e)) from e
            stored_version = migration.version
            continue

        try:
            conn.execute("BEGIN IMMEDIATE")
            for statement in migration.statements:
                conn.execute(statement)
            conn.execute(
                f"INSERT INTO {MIGRATIONS_TABLE} (version, description, applied_at) "
                "VALUES (?, ?, ?)",
                (migration.version, migration.description, clock().strftime(TIMESTAMP_FORMAT)),
            )
            conn.execute(f"PRAGMA user_version = {int(migration.version)}")
            conn.execute("COMMIT")
        except sqlite3.Error as e:
            _rollback(conn, migration.version)
            logger.error(
                "migration_failed",
                version=migration.version,
                description=migration.description,
                error=str(e),
            )
            raise MigrationError(stored_version, migration.version, str(e)) from e

        logger.info(
            "migration_applied",
            version=migration.version,
            description=migration.description,
        )
        stored_version = migration.version
        applied_now.append(migration.version)

    return applied_now


def _rollback(conn: sqlite3.Connection, version: int) -> None:
    if not conn.in_transaction:
        return
    try:
        conn.execute("ROLLBACK")
    except sqlite3.Error as e:
        # The step error is raised by the caller; this one is only logged.
        logger.error("migration_rollback_failed", version=version, error=str(e))
