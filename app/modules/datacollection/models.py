"""Data collection domain models.

Event kinds, the normalized row shapes, and the tagged payload variants that
inbound calls are decoded into before normalization.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Tuple, Union

STATE_ENABLED = "enabled"
STATE_DISABLED = "disabled"

# Subject recorded when an enabled-service list arrives empty.
ALL_DISABLED_SUBJECT = "all-disabled"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class EventKind(IntEnum):
    """Category of a collected signal.

    The integer codes are part of the caller contract and are what the
    ``event_kind`` column stores.
    """

    DEVICE_ADMIN = 0
    ACCESSIBILITY = 1
    USAGE_STATS = 2


@dataclass(frozen=True)
class PendingRecord:
    """A normalized row that has not been persisted yet."""

    event_kind: int
    subject: str
    state: str


@dataclass(frozen=True)
class EventRecord:
    """A stored row of the collected events table."""

    id: int
    """Store-assigned identifier, strictly increasing, never reused."""

    event_kind: int
    """Event kind code (see EventKind)."""

    subject: str
    """Collected item, usually a package or service name."""

    state: str
    """Status tag of the subject at collection time."""

    created_at: str
    """Insertion time, formatted with TIMESTAMP_FORMAT."""

    @classmethod
    def from_row(cls, row: Tuple[Any, ...]) -> "EventRecord":
        """Build a record from an (id, event_kind, subject, state, created_at) row."""
        row_id, event_kind, subject, state, created_at = row
        return cls(
            id=int(row_id),
            event_kind=int(event_kind),
            subject=subject,
            state=state,
            created_at=created_at,
        )

    def to_dump_line(self) -> str:
        """Render the record as ``<event_kind> <subject> <state> <created_at>``."""
        return " ".join(
            [str(self.event_kind), self.subject, self.state, self.created_at]
        )


@dataclass(frozen=True)
class PackageNamePayload:
    """A single package name reported through the direct collection call."""

    kind: EventKind
    package_name: str


@dataclass(frozen=True)
class AccessibilityPayload:
    """The full list of currently enabled accessibility services, in order."""

    enabled_services: Tuple[str, ...]


@dataclass(frozen=True)
class DeviceAdminPayload:
    """Device-admin event. Recognized, not mapped to rows yet."""


@dataclass(frozen=True)
class UsageStatsPayload:
    """Usage-stats event. Recognized, not mapped to rows yet."""


@dataclass(frozen=True)
class UnknownPayload:
    """An event whose kind code is not recognized."""

    code: Any


Payload = Union[
    PackageNamePayload,
    AccessibilityPayload,
    DeviceAdminPayload,
    UsageStatsPayload,
    UnknownPayload,
]
