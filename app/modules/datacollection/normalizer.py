"""Event normalizer: typed payloads to normalized rows.

A pure mapping stage. Each recognized payload becomes zero or more
PendingRecord rows; an unknown kind is reported as a permanent error result
with no rows, never raised.
"""

from typing import List

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult
from modules.datacollection.models import (
    ALL_DISABLED_SUBJECT,
    STATE_DISABLED,
    STATE_ENABLED,
    AccessibilityPayload,
    DeviceAdminPayload,
    EventKind,
    PackageNamePayload,
    Payload,
    PendingRecord,
    UnknownPayload,
    UsageStatsPayload,
)

logger = get_module_logger()

UNKNOWN_EVENT_KIND = "UNKNOWN_EVENT_KIND"


def normalize_package_name(payload: PackageNamePayload) -> List[PendingRecord]:
    # This call path only ever reports additions.
    return [
        PendingRecord(
            event_kind=int(payload.kind),
            subject=payload.package_name,
            state=STATE_ENABLED,
        )
    ]


def normalize_accessibility(payload: AccessibilityPayload) -> List[PendingRecord]:
    """Map an enabled-service list onto rows.

    An empty list means every service was disabled and is recorded as one
    sentinel row; otherwise each service gets an ``enabled`` row, in order.
    """
    kind = int(EventKind.ACCESSIBILITY)
    if not payload.enabled_services:
        return [
            PendingRecord(
                event_kind=kind,
                subject=ALL_DISABLED_SUBJECT,
                state=STATE_DISABLED,
            )
        ]
    return [
        PendingRecord(event_kind=kind, subject=service, state=STATE_ENABLED)
        for service in payload.enabled_services
    ]


def normalize(payload: Payload) -> OperationResult:
    """Map a decoded payload onto normalized rows.

    Args:
        payload: One of the payload variants from ``models``.

    Returns:
        SUCCESS with ``data`` set to the list of PendingRecord rows (possibly
        empty), or PERMANENT_ERROR with error_code UNKNOWN_EVENT_KIND.
    """
    if isinstance(payload, PackageNamePayload):
        records = normalize_package_name(payload)
    elif isinstance(payload, AccessibilityPayload):
        records = normalize_accessibility(payload)
        logger.debug(
            "accessibility_services_normalized",
            enabled_count=len(payload.enabled_services),
        )
    elif isinstance(payload, (DeviceAdminPayload, UsageStatsPayload)):
        # Reserved kinds: recognized, nothing to record yet.
        records = []
    else:
        code = payload.code if isinstance(payload, UnknownPayload) else payload
        logger.warning("unknown_event_kind_ignored", event_kind=repr(code))
        return OperationResult.permanent_error(
            f"Unknown event kind: {code!r}", error_code=UNKNOWN_EVENT_KIND
        )

    return OperationResult.success(
        data=records, message=f"normalized {len(records)} rows"
    )
