"""Domain models.

Contains the Pydantic models shared by the history and status layers:
- Severity for priority ordering
- HistoryRecord for immutable audit entries
- SlotMessage for per-slot status messages
"""

from signalboard.models.enums import Severity
from signalboard.models.record import HistoryRecord, utc_now
from signalboard.models.slot import SlotMessage

__all__ = [
    "HistoryRecord",
    "Severity",
    "SlotMessage",
    "utc_now",
]
