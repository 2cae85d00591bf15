"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of ingestion
and storage operations so callers can log them without raising.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Storage hiccup (locked database, I/O error)
        PERMANENT_ERROR: Non-retryable error (decode failure, constraint violation)
        DROPPED: Write intentionally discarded (capacity ceiling reached)
        UNAVAILABLE: Service not ready, failed, or unreachable
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    DROPPED = "dropped"
    UNAVAILABLE = "unavailable"
