"""Tests for RingBuffer."""

import json
from datetime import datetime

import pytest

from signalboard.history.ring import DEFAULT_CAPACITY, RingBuffer
from signalboard.models import Severity
from tests.factories import HistoryRecordFactory


@pytest.fixture
def ring() -> RingBuffer:
    return RingBuffer()


class TestAppend:
    """Tests for append and eviction."""

    def test_default_capacity(self, ring: RingBuffer) -> None:
        assert ring.capacity == DEFAULT_CAPACITY == 100

    def test_rejects_non_positive_capacity(self) -> None:
        with pytest.raises(ValueError):
            RingBuffer(0)

    def test_drops_oldest_when_full(self, ring: RingBuffer) -> None:
        """105 appends keep records 5..104."""
        for record in HistoryRecordFactory.create_many(105):
            ring.append(record)

        records = ring.snapshot()
        assert len(records) == 100
        assert records[0].text == "Message 5"
        assert records[-1].text == "Message 104"

    def test_append_returns_evicted(self) -> None:
        ring = RingBuffer(2)
        first, second, third = HistoryRecordFactory.create_many(3)
        assert ring.append(first) is None
        assert ring.append(second) is None
        assert ring.append(third) is first
        assert len(ring) == 2


class TestSnapshot:
    """Tests for snapshot isolation."""

    def test_snapshot_is_a_copy(self, ring: RingBuffer) -> None:
        ring.append(HistoryRecordFactory.create())
        snapshot = ring.snapshot()
        snapshot.clear()
        assert len(ring) == 1
        assert ring.snapshot() is not ring.snapshot()

    def test_iteration_in_insertion_order(self, ring: RingBuffer) -> None:
        for record in HistoryRecordFactory.create_many(3):
            ring.append(record)
        assert [r.text for r in ring] == ["Message 0", "Message 1", "Message 2"]


class TestFilter:
    """Tests for filter."""

    @pytest.fixture
    def filled(self, ring: RingBuffer) -> RingBuffer:
        ring.append(HistoryRecordFactory.create(text="Storage error", severity=Severity.ERROR, category="storage"))
        ring.append(HistoryRecordFactory.create(text="Storage warn", severity=Severity.WARN, category="storage"))
        ring.append(HistoryRecordFactory.create(text="API error", severity=Severity.ERROR, category="api-test"))
        ring.append(HistoryRecordFactory.create(text="Form debug", severity=Severity.DEBUG, category="form-input"))
        return ring

    def test_by_severity(self, filled: RingBuffer) -> None:
        errors = filled.filter([Severity.ERROR])
        assert [r.text for r in errors] == ["Storage error", "API error"]

    def test_by_category(self, filled: RingBuffer) -> None:
        storage = filled.filter(categories=["storage"])
        assert all(r.category == "storage" for r in storage)
        assert len(storage) == 2

    def test_by_severity_and_category(self, filled: RingBuffer) -> None:
        result = filled.filter([Severity.ERROR], ["storage"])
        assert [r.text for r in result] == ["Storage error"]

    def test_empty_filters_match_all(self, filled: RingBuffer) -> None:
        assert len(filled.filter([], [])) == 4
        assert len(filled.filter()) == 4

    def test_no_match(self, filled: RingBuffer) -> None:
        assert filled.filter([Severity.INFO]) == []


class TestExport:
    """Tests for export_json and render_lines."""

    def test_export_json(self, ring: RingBuffer) -> None:
        ring.append(HistoryRecordFactory.create(text="Error msg", severity=Severity.ERROR))
        ring.append(
            HistoryRecordFactory.create(
                text='Info {"n":1}',
                category="api-test",
                raw_args=("Info", {"n": 1}),
            )
        )

        parsed = json.loads(ring.export_json())
        assert len(parsed) == 2
        assert parsed[0]["severity"] == "error"
        assert parsed[0]["category"] == "storage"
        assert parsed[0]["text"] == "Error msg"
        assert parsed[1]["args"] == ["Info", '{"n":1}']
        for entry in parsed:
            assert datetime.fromisoformat(entry["timestamp"]).tzinfo is not None

    def test_export_is_indented(self, ring: RingBuffer) -> None:
        ring.append(HistoryRecordFactory.create())
        text = ring.export_json()
        assert "\n" in text
        assert "  " in text

    def test_export_empty(self, ring: RingBuffer) -> None:
        assert json.loads(ring.export_json()) == []

    def test_render_lines(self, ring: RingBuffer) -> None:
        ring.append(HistoryRecordFactory.create(text="Disk full", severity=Severity.WARN))
        (line,) = ring.render_lines()
        assert line == "[2026-01-01T12:00:00+00:00] WARN storage: Disk full"

    def test_clear(self, ring: RingBuffer) -> None:
        ring.append(HistoryRecordFactory.create())
        ring.clear()
        assert len(ring) == 0
