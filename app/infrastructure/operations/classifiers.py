"""Error classifiers for storage exceptions.

Converts sqlite3 exceptions into standardized OperationResult objects so the
store can report ordinary storage failures without raising.

Usage:
    from infrastructure.operations.classifiers import classify_sqlite_error

    try:
        conn.execute(sql, params)
    except sqlite3.Error as exc:
        return classify_sqlite_error(exc)
"""

import sqlite3

from infrastructure.operations.result import OperationResult


def classify_sqlite_error(exc: Exception) -> OperationResult:
    """Classify sqlite3 errors into OperationResult.

    Mapping:
    - OperationalError (locked, busy, disk I/O, unable to open): TRANSIENT_ERROR
    - IntegrityError (NOT NULL, UNIQUE): PERMANENT_ERROR
    - ProgrammingError (closed connection, bad SQL): PERMANENT_ERROR
    - Other DatabaseError (corrupt file, not a database): PERMANENT_ERROR
    - Anything else: PERMANENT_ERROR

    Args:
        exc: Exception raised by the sqlite3 module

    Returns:
        OperationResult with appropriate status, message and error_code
    """
    detail = f"{type(exc).__name__}: {exc}"

    if isinstance(exc, sqlite3.OperationalError):
        message = str(exc).lower()
        if "locked" in message or "busy" in message:
            return OperationResult.transient_error(
                f"Database busy: {detail}", error_code="DATABASE_LOCKED"
            )
        return OperationResult.transient_error(
            f"Storage operation failed: {detail}", error_code="STORAGE_ERROR"
        )

    if isinstance(exc, sqlite3.IntegrityError):
        return OperationResult.permanent_error(
            f"Constraint violated: {detail}", error_code="INTEGRITY_ERROR"
        )

    if isinstance(exc, sqlite3.ProgrammingError):
        return OperationResult.permanent_error(
            f"Invalid storage usage: {detail}", error_code="PROGRAMMING_ERROR"
        )

    if isinstance(exc, sqlite3.DatabaseError):
        return OperationResult.permanent_error(
            f"Database error: {detail}", error_code="DATABASE_ERROR"
        )

    return OperationResult.permanent_error(
        f"Unexpected storage error: {detail}", error_code="UNKNOWN_ERROR"
    )
