"""Unit tests for data collection models."""

import pytest

from modules.datacollection.models import EventKind, EventRecord

pytestmark = pytest.mark.unit


class TestEventKind:
    def test_codes_match_caller_contract(self):
        assert EventKind.DEVICE_ADMIN == 0
        assert EventKind.ACCESSIBILITY == 1
        assert EventKind.USAGE_STATS == 2


class TestEventRecord:
    def test_from_row(self):
        record = EventRecord.from_row((7, 1, "svc.A", "enabled", "2024-01-15 09:30:00"))

        assert record.id == 7
        assert record.event_kind == 1
        assert record.subject == "svc.A"
        assert record.state == "enabled"
        assert record.created_at == "2024-01-15 09:30:00"

    def test_to_dump_line_is_space_joined(self):
        record = EventRecord(
            id=3,
            event_kind=1,
            subject="all-disabled",
            state="disabled",
            created_at="2024-01-15 09:30:00",
        )

        assert record.to_dump_line() == "1 all-disabled disabled 2024-01-15 09:30:00"

    def test_record_is_immutable(self):
        record = EventRecord.from_row((1, 0, "pkg", "enabled", "2024-01-15 09:30:00"))

        with pytest.raises(AttributeError):
            record.subject = "other"
