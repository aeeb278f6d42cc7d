"""Test factories and deterministic collaborators."""

from tests.factories.records import HistoryRecordFactory, SlotMessageFactory
from tests.factories.timing import (
    FailingTimer,
    ManualClock,
    ManualTimer,
    RecordingSink,
)

__all__ = [
    "FailingTimer",
    "HistoryRecordFactory",
    "ManualClock",
    "ManualTimer",
    "RecordingSink",
    "SlotMessageFactory",
]
