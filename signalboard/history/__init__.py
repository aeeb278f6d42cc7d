"""Audit history: argument formatting and the ring buffer.

The recorder lives in ``signalboard.history.recorder``.
"""

from signalboard.history.formatting import format_arg, format_args
from signalboard.history.ring import DEFAULT_CAPACITY, RingBuffer

__all__ = [
    "DEFAULT_CAPACITY",
    "RingBuffer",
    "format_arg",
    "format_args",
]
