"""Custom exceptions for the data collection module.

These never cross the IPC boundary: the service converts them into
OperationResult values or into the FAILED state and logs them.
"""

from typing import Optional


class DataCollectionError(Exception):
    """Base exception for all data collection errors.

    Example:
        try:
            store = EventStore.open(path)
        except DataCollectionError as e:
            logger.error("store_open_failed", error=str(e))
    """

    pass


class StorageUnavailableError(DataCollectionError):
    """Raised when the backing storage medium cannot be opened at all."""

    pass


class MigrationError(DataCollectionError):
    """Raised when the schema cannot be brought to the target version.

    Attributes:
        version_from: Schema version found in storage
        version_to: Requested target version
        error: Underlying failure description
    """

    def __init__(
        self,
        version_from: int,
        version_to: Optional[int],
        error: str,
    ):
        self.version_from = version_from
        self.version_to = version_to
        self.error = error
        super().__init__(
            f"Schema migration v{version_from} -> v{version_to} failed: {error}"
        )


class PayloadDecodeError(DataCollectionError):
    """Raised when an inbound payload bundle is malformed."""

    pass
