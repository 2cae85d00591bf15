"""SQLite-backed persistence for collected events.

One connection per store, shared across threads. Every write takes the
store lock, and the capacity check runs inside the same critical section as
the write it guards. Scans take the lock one page at a time.
"""

import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import (
    TYPE_CHECKING,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Union,
)

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, classify_sqlite_error
from modules.datacollection.capacity import CapacityGate
from modules.datacollection.exceptions import StorageUnavailableError
from modules.datacollection.models import TIMESTAMP_FORMAT, EventRecord, PendingRecord
from modules.datacollection.schema import (
    EVENTS_TABLE,
    MIGRATIONS,
    Migration,
    apply_migrations,
    get_stored_version,
)

if TYPE_CHECKING:
    from infrastructure.configuration import DataCollectionSettings

logger = get_module_logger()

MEMORY_DATABASE = ":memory:"
DEFAULT_SCAN_PAGE_SIZE = 500

_COLUMNS = "id, event_kind, subject, state, created_at"


class EventStore:
    """Capacity-bounded, schema-versioned table of collected events.

    Use ``EventStore.open`` (or ``from_settings``) rather than the constructor;
    it creates the database if needed and applies pending migrations.

    Usage:
        with EventStore.open(tmp_path / "datacollection.db", capacity=1000) as store:
            result = store.insert(PendingRecord(1, "com.example.reader", "enabled"))
            if result.is_success:
                row_id = result.data
            for record in store.scan_all():
                ...
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        gate: CapacityGate,
        path: Union[str, Path] = MEMORY_DATABASE,
        scan_page_size: int = DEFAULT_SCAN_PAGE_SIZE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        if scan_page_size < 1:
            raise ValueError(f"scan_page_size must be >= 1, got {scan_page_size}")
        self._conn = connection
        self._gate = gate
        self._path = path
        self._scan_page_size = scan_page_size
        self._clock = clock
        self._lock = threading.Lock()

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        capacity: int = 2**31 - 1,
        target_version: Optional[int] = None,
        scan_page_size: int = DEFAULT_SCAN_PAGE_SIZE,
        busy_timeout_seconds: float = 5.0,
        clock: Optional[Callable[[], datetime]] = None,
        migrations: Sequence[Migration] = MIGRATIONS,
    ) -> "EventStore":
        """Open (creating if absent) the store and migrate it to the target version.

        Args:
            path: Database file, or ``":memory:"``.
            capacity: Row ceiling enforced by the capacity gate.
            target_version: Schema version to migrate to, latest when None.
            scan_page_size: Rows fetched per lock acquisition during scans.
            busy_timeout_seconds: How long SQLite waits on a locked database.
            clock: Source of ``created_at`` timestamps, ``datetime.now`` by default.
            migrations: Schema registry to apply.

        Returns:
            A ready EventStore.

        Raises:
            StorageUnavailableError: If the storage medium cannot be opened.
            MigrationError: If the schema cannot reach the target version.
        """
        gate = CapacityGate(capacity)
        clock = clock or datetime.now
        conn = _connect(path, busy_timeout_seconds)

        try:
            applied = apply_migrations(
                conn, target_version=target_version, migrations=migrations, clock=clock
            )
            stored_version = get_stored_version(conn)
        except sqlite3.Error as e:
            conn.close()
            logger.error("event_store_unavailable", path=str(path), error=str(e))
            raise StorageUnavailableError(f"cannot read schema of {path}: {e}") from e
        except Exception:
            conn.close()
            raise

        store = cls(
            conn,
            gate,
            path=path,
            scan_page_size=scan_page_size,
            clock=clock,
        )
        logger.info(
            "event_store_opened",
            path=str(path),
            schema_version=stored_version,
            migrations_applied=applied,
            capacity=gate.ceiling,
        )
        return store

    @classmethod
    def from_settings(
        cls,
        settings: "DataCollectionSettings",
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "EventStore":
        """Open the store described by the data collection settings."""
        return cls.open(
            settings.db_path,
            capacity=settings.capacity,
            target_version=settings.schema_version,
            scan_page_size=settings.scan_page_size,
            busy_timeout_seconds=settings.busy_timeout_seconds,
            clock=clock,
        )

    @property
    def path(self) -> Union[str, Path]:
        return self._path

    @property
    def gate(self) -> CapacityGate:
        return self._gate

    def schema_version(self) -> int:
        with self._lock:
            return get_stored_version(self._conn)

    def count(self) -> int:
        """Current number of stored rows."""
        with self._lock:
            return self._count_locked()

    def _count_locked(self) -> int:
        row = self._conn.execute(f"SELECT COUNT(*) FROM {EVENTS_TABLE}").fetchone()
        return int(row[0])

    def insert(self, record: PendingRecord) -> OperationResult:
        """Write one row unless the table is at capacity.

        Never raises on storage errors; they are logged and returned as a
        classified error result, and the record is lost.

        Args:
            record: Normalized row to persist.

        Returns:
            SUCCESS with the new row id as ``data``, DROPPED at capacity, or
            TRANSIENT_ERROR / PERMANENT_ERROR on storage failure.
        """
        with self._lock:
            try:
                row_count = self._count_locked()
                if self._gate.is_full(row_count):
                    logger.info(
                        "event_dropped",
                        reason="capacity",
                        ceiling=self._gate.ceiling,
                        event_kind=record.event_kind,
                        subject=record.subject,
                    )
                    return OperationResult.dropped(
                        f"table full ({row_count}/{self._gate.ceiling})"
                    )

                created_at = self._clock().strftime(TIMESTAMP_FORMAT)
                cursor = self._conn.execute(
                    f"INSERT INTO {EVENTS_TABLE} (event_kind, subject, state, created_at) "
                    "VALUES (?, ?, ?, ?)",
                    (record.event_kind, record.subject, record.state, created_at),
                )
                row_id = cursor.lastrowid
            except sqlite3.Error as e:
                result = classify_sqlite_error(e)
                logger.error(
                    "event_insert_failed",
                    event_kind=record.event_kind,
                    subject=record.subject,
                    error=result.message,
                    error_code=result.error_code,
                )
                return result

        logger.debug(
            "event_inserted",
            row_id=row_id,
            event_kind=record.event_kind,
            subject=record.subject,
            state=record.state,
        )
        return OperationResult.success(data=row_id, message="inserted")

    def insert_many(self, records: Iterable[PendingRecord]) -> List[OperationResult]:
        """Insert each record in order; not a transaction.

        Once the gate fills up mid-sequence the remaining records are dropped
        one by one, so partial success is expected.

        Returns:
            One result per record, in input order.
        """
        return [self.insert(record) for record in records]

    def scan_all(self) -> Iterator[EventRecord]:
        """Lazily yield every stored row in insertion (id) order.

        The generator is single-use; call scan_all again to rescan. Rows are
        fetched in pages so writers only wait for one page query at a time.

        Raises:
            sqlite3.Error: If a page cannot be read.
        """
        last_id = 0
        while True:
            with self._lock:
                rows = self._conn.execute(
                    f"SELECT {_COLUMNS} FROM {EVENTS_TABLE} "
                    "WHERE id > ? ORDER BY id LIMIT ?",
                    (last_id, self._scan_page_size),
                ).fetchall()
            for row in rows:
                yield EventRecord.from_row(row)
            if len(rows) < self._scan_page_size:
                return
            last_id = rows[-1][0]

    def exists(
        self, event_kind: int, subject: str, state: Optional[str] = None
    ) -> bool:
        """Whether a row with this kind and subject (and state, if given) is stored."""
        query = f"SELECT 1 FROM {EVENTS_TABLE} WHERE event_kind = ? AND subject = ?"
        params: list = [int(event_kind), subject]
        if state is not None:
            query += " AND state = ?"
            params.append(state)
        with self._lock:
            row = self._conn.execute(query + " LIMIT 1", params).fetchone()
        return row is not None

    def reset(self) -> OperationResult:
        """Delete every row, keeping the schema and its version.

        Row ids keep increasing afterwards; AUTOINCREMENT never reuses them.

        Returns:
            SUCCESS with the number of deleted rows as ``data``, or a
            classified storage error.
        """
        with self._lock:
            try:
                cursor = self._conn.execute(f"DELETE FROM {EVENTS_TABLE}")
                deleted = cursor.rowcount
            except sqlite3.Error as e:
                result = classify_sqlite_error(e)
                logger.error(
                    "event_table_reset_failed",
                    error=result.message,
                    error_code=result.error_code,
                )
                return result

        logger.warning("event_table_reset", deleted_rows=deleted)
        return OperationResult.success(data=deleted, message="table reset")

    def iter_dump_lines(self) -> Iterator[str]:
        """Yield ``<event_kind> <subject> <state> <created_at>`` for every row."""
        for record in self.scan_all():
            yield record.to_dump_line()

    def dump(self) -> int:
        """Render every row to the log, in id order.

        Returns:
            Number of rows rendered.
        """
        rendered = 0
        try:
            for line in self.iter_dump_lines():
                logger.debug("event_row", row=line)
                rendered += 1
        except sqlite3.Error as e:
            logger.error("event_dump_failed", error=str(e), rows_rendered=rendered)
            return rendered

        if rendered == 0:
            logger.debug("event_table_empty")
        return rendered

    def close(self) -> None:
        with self._lock:
            self._conn.close()
        logger.debug("event_store_closed", path=str(self._path))

    def __enter__(self) -> "EventStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _connect(path: Union[str, Path], busy_timeout_seconds: float) -> sqlite3.Connection:
    """Open an autocommit connection, creating the parent directory if needed.

    Raises:
        StorageUnavailableError: If the directory or database cannot be opened.
    """
    try:
        if str(path) != MEMORY_DATABASE:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(
            str(path),
            timeout=busy_timeout_seconds,
            isolation_level=None,
            check_same_thread=False,
        )
    except (OSError, sqlite3.Error) as e:
        logger.error("event_store_unavailable", path=str(path), error=str(e))
        raise StorageUnavailableError(f"cannot open {path}: {e}") from e

    try:
        # sqlite connects lazily; touch the file so a bad medium fails here.
        conn.execute("PRAGMA schema_version").fetchone()
    except sqlite3.Error as e:
        conn.close()
        logger.error("event_store_unavailable", path=str(path), error=str(e))
        raise StorageUnavailableError(f"cannot read {path}: {e}") from e

    return conn
