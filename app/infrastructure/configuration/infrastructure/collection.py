"""Data collection infrastructure settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from infrastructure.configuration.base import InfrastructureSettings

# Integer.MAX_VALUE: no ceiling in practice, still a finite tunable.
DEFAULT_CAPACITY = 2**31 - 1


class DataCollectionSettings(InfrastructureSettings):
    """Storage and ingestion configuration for the data collection service.

    Environment Variables:
        DATA_COLLECTION_DB_DIR: Storage directory supplied by the host (default: ./data)
        DATA_COLLECTION_DB_NAME: Database file name (default: datacollection.db)
        DATA_COLLECTION_CAPACITY: Maximum number of stored rows (default: 2147483647)
        DATA_COLLECTION_SCHEMA_VERSION: Target schema version (default: latest registered)
        DATA_COLLECTION_DUMP_AFTER_WRITE: Dump the table to the log after each ingestion (default: True)
        DATA_COLLECTION_ALLOW_RESET: Permit the dev-only table reset (default: False)
        DATA_COLLECTION_READINESS_PROPERTY: Environment property that signals boot completion
            (default: SYS_BOOT_COMPLETED)
        DATA_COLLECTION_SCAN_PAGE_SIZE: Rows fetched per page during a full scan (default: 500)
        DATA_COLLECTION_BUSY_TIMEOUT_SECONDS: SQLite busy timeout (default: 5.0)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        db_path = settings.data_collection.db_path
        ceiling = settings.data_collection.capacity
        ```
    """

    model_config = SettingsConfigDict(populate_by_name=True)

    db_dir: str = Field(
        default="./data",
        alias="DATA_COLLECTION_DB_DIR",
        description="Directory holding the collection database",
    )
    db_name: str = Field(
        default="datacollection.db",
        alias="DATA_COLLECTION_DB_NAME",
        description="Database file name inside db_dir",
    )
    capacity: int = Field(
        default=DEFAULT_CAPACITY,
        ge=0,
        alias="DATA_COLLECTION_CAPACITY",
        description="Row ceiling; inserts at the ceiling are dropped",
    )
    schema_version: Optional[int] = Field(
        default=None,
        ge=1,
        alias="DATA_COLLECTION_SCHEMA_VERSION",
        description="Target schema version, latest registered when unset",
    )
    dump_after_write: bool = Field(
        default=True,
        alias="DATA_COLLECTION_DUMP_AFTER_WRITE",
        description="Render the table to the log after each ingestion (DEBUG only)",
    )
    allow_reset: bool = Field(
        default=False,
        alias="DATA_COLLECTION_ALLOW_RESET",
        description="Permit the development-only table reset",
    )
    readiness_property: str = Field(
        default="SYS_BOOT_COMPLETED",
        alias="DATA_COLLECTION_READINESS_PROPERTY",
        description="Environment property polled for boot completion",
    )
    scan_page_size: int = Field(
        default=500,
        ge=1,
        alias="DATA_COLLECTION_SCAN_PAGE_SIZE",
        description="Rows fetched per page during a full scan",
    )
    busy_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        alias="DATA_COLLECTION_BUSY_TIMEOUT_SECONDS",
        description="SQLite busy timeout (seconds)",
    )

    @property
    def db_path(self) -> Path:
        """Full path of the collection database file."""
        return Path(self.db_dir) / self.db_name
