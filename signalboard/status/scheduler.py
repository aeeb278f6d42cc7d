"""Single-timer expiry scheduling for transient status messages.

Only one timer is ever pending. It targets the earliest expiry that
subscribers have not yet seen take effect. Firing does not touch the store:
it asks for a fresh visibility notification, which naturally drops expired
messages, and then re-arms for the next expiry.
"""

import asyncio
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from signalboard.models import utc_now
from signalboard.observability.logging import get_logger
from signalboard.observability.metrics import EXPIRY_TIMER_FIRES
from signalboard.status.store import SlotStore

logger = get_logger(__name__)


class TimerHandle(Protocol):
    """A pending timer that can be cancelled."""

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def loop_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Arm ``callback`` after ``delay`` seconds on the running event loop.

    Raises:
        RuntimeError: If no event loop is running in this thread
    """
    return asyncio.get_running_loop().call_later(delay, callback)


class ExpirationScheduler:
    """Keep one timer armed for the next pending expiry in a slot store."""

    def __init__(
        self,
        store: SlotStore,
        on_expiry: Callable[[], datetime],
        *,
        clock: Callable[[], datetime] = utc_now,
        timer: TimerFactory = loop_timer,
    ) -> None:
        """Initialize the scheduler.

        Args:
            store: Slot store scanned for expiries
            on_expiry: Called when the timer fires; publishes visibility and
                returns the instant the visible message was resolved at
            clock: Source of the current time
            timer: Factory arming the underlying timer
        """
        self._store = store
        self._on_expiry = on_expiry
        self._clock = clock
        self._timer = timer
        self._handle: TimerHandle | None = None
        self._target: datetime | None = None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    @property
    def target(self) -> datetime | None:
        """Expiry instant the pending timer is armed for."""
        return self._target

    def reschedule(self, after: datetime) -> None:
        """Re-arm for the earliest expiry strictly later than ``after``.

        ``after`` is the instant of the last visibility resolution; expiries
        at or before it are already reflected in what subscribers saw.
        """
        self.cancel()

        pending = [expiry for expiry in self._store.expiries() if expiry > after]
        if not pending:
            return

        target = min(pending)
        delay = max(0.0, (target - self._clock()).total_seconds())
        try:
            self._handle = self._timer(delay, self._fire)
        except RuntimeError:
            logger.warning(
                "expiry_timer_unavailable",
                target=target.isoformat(),
                reason="no running event loop",
            )
            return
        self._target = target
        logger.debug("expiry_timer_armed", target=target.isoformat(), delay=delay)

    def cancel(self) -> None:
        """Cancel the pending timer, if any."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._target = None

    def _fire(self) -> None:
        target = self._target
        self._handle = None
        self._target = None
        EXPIRY_TIMER_FIRES.inc()
        logger.debug(
            "expiry_timer_fired",
            target=target.isoformat() if target else None,
        )
        resolved_at = self._on_expiry()
        self.reschedule(after=resolved_at)
