"""signalboard: bounded audit history plus a prioritised status line.

Usage:
    from signalboard import StatusBoard, Severity

    board = StatusBoard()
    board.info("sync", "Connected")
    board.warn_flash(2000, "save", "Saved with warnings")
    visible = board.current_visible()
"""

from signalboard.board import StatusBoard
from signalboard.models import HistoryRecord, Severity, SlotMessage

__all__ = [
    "HistoryRecord",
    "Severity",
    "SlotMessage",
    "StatusBoard",
]
