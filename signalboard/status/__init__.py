"""Status layer: slot store, expiry scheduling and visibility resolution."""

from signalboard.status.resolver import resolve_visible
from signalboard.status.scheduler import (
    ExpirationScheduler,
    TimerFactory,
    TimerHandle,
    loop_timer,
)
from signalboard.status.store import SlotStore

__all__ = [
    "ExpirationScheduler",
    "SlotStore",
    "TimerFactory",
    "TimerHandle",
    "loop_timer",
    "resolve_visible",
]
