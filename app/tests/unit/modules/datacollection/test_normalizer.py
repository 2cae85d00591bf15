"""Unit tests for the event normalizer."""

import pytest

from infrastructure.operations import OperationStatus
from modules.datacollection.models import (
    AccessibilityPayload,
    DeviceAdminPayload,
    EventKind,
    PackageNamePayload,
    PendingRecord,
    UnknownPayload,
    UsageStatsPayload,
)
from modules.datacollection.normalizer import UNKNOWN_EVENT_KIND, normalize

pytestmark = pytest.mark.unit


class TestNormalize:
    def test_package_name_produces_one_enabled_row(self):
        result = normalize(
            PackageNamePayload(kind=EventKind.DEVICE_ADMIN, package_name="com.example.mdm")
        )

        assert result.is_success
        assert result.data == [PendingRecord(0, "com.example.mdm", "enabled")]

    def test_accessibility_list_produces_one_row_per_service_in_order(self):
        result = normalize(AccessibilityPayload(enabled_services=("svc.A", "svc.B", "svc.C")))

        assert result.is_success
        assert result.data == [
            PendingRecord(1, "svc.A", "enabled"),
            PendingRecord(1, "svc.B", "enabled"),
            PendingRecord(1, "svc.C", "enabled"),
        ]

    def test_empty_accessibility_list_produces_sentinel_row(self):
        result = normalize(AccessibilityPayload(enabled_services=()))

        assert result.is_success
        assert result.data == [PendingRecord(1, "all-disabled", "disabled")]

    @pytest.mark.parametrize("payload", [DeviceAdminPayload(), UsageStatsPayload()])
    def test_reserved_kinds_produce_no_rows(self, payload):
        result = normalize(payload)

        assert result.is_success
        assert result.data == []

    def test_unknown_kind_is_permanent_error_without_rows(self):
        result = normalize(UnknownPayload(code=17))

        assert result.status == OperationStatus.PERMANENT_ERROR
        assert result.error_code == UNKNOWN_EVENT_KIND
        assert result.data is None
