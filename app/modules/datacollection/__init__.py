"""Data collection module.

Receives typed telemetry events from client processes and records them in a
capacity-bounded, schema-versioned SQLite table.

Usage:

    from modules.datacollection import (
        DataCollectionService,
        EventKind,
        EventStore,
        StaticReadiness,
    )

    service = DataCollectionService(
        store_factory=lambda: EventStore.open("data/datacollection.db"),
        readiness=StaticReadiness(True),
    )
    service.collect_pkg_name(EventKind.DEVICE_ADMIN, "com.example.mdm")
    service.notify_data_event(
        EventKind.ACCESSIBILITY, {"enabled_service_list": ["svc.A", "svc.B"]}
    )
"""

from modules.datacollection.bundles import (
    ENABLED_SERVICE_LIST_KEY,
    EVENT_TYPE_KEY,
    build_accessibility_bundle,
    decode_bundle,
    decode_pkg_name,
)
from modules.datacollection.capacity import CapacityGate
from modules.datacollection.client import DataCollectionClient
from modules.datacollection.exceptions import (
    DataCollectionError,
    MigrationError,
    PayloadDecodeError,
    StorageUnavailableError,
)
from modules.datacollection.models import (
    ALL_DISABLED_SUBJECT,
    STATE_DISABLED,
    STATE_ENABLED,
    EventKind,
    EventRecord,
    PendingRecord,
)
from modules.datacollection.normalizer import normalize
from modules.datacollection.readiness import BootPropertyReadiness, StaticReadiness
from modules.datacollection.schema import latest_version, plan_migrations
from modules.datacollection.service import DataCollectionService, ServiceState
from modules.datacollection.store import EventStore

__all__ = [
    "ALL_DISABLED_SUBJECT",
    "BootPropertyReadiness",
    "CapacityGate",
    "DataCollectionClient",
    "DataCollectionError",
    "DataCollectionService",
    "ENABLED_SERVICE_LIST_KEY",
    "EVENT_TYPE_KEY",
    "EventKind",
    "EventRecord",
    "EventStore",
    "MigrationError",
    "PayloadDecodeError",
    "PendingRecord",
    "STATE_DISABLED",
    "STATE_ENABLED",
    "ServiceState",
    "StaticReadiness",
    "StorageUnavailableError",
    "build_accessibility_bundle",
    "decode_bundle",
    "decode_pkg_name",
    "latest_version",
    "normalize",
    "plan_migrations",
]
