"""StatusBoard: unified audit history and status line for one session.

API overview:

    Persistent status (recorded, stays until replaced or cleared):
        board.error(slot, *args)     board.warn(slot, *args)
        board.info(slot, *args)      board.debug(slot, *args)
        board.post(severity, slot, *args)

    Transient status (recorded, stops being visible after the timeout):
        board.error_flash(timeout_ms, slot, *args)
        board.warn_flash(timeout_ms, slot, *args)
        board.info_flash(timeout_ms, slot, *args)
        board.flash(severity, slot, *args, timeout_ms=None)

    History only:
        board.log(severity, category, *args)

    Queries:
        board.current_visible(), board.history(), board.filter_history(...),
        board.export_history(), board.render_history()

    Management:
        board.clear_slot(slot=None, severity=None), board.clear_history(),
        board.prune_expired(), board.close()

    Subscriptions (each returns an unsubscribe callable):
        board.on_history_change(callback)
        board.on_visibility_change(callback)

Visibility: a live transient message always wins, the most recent one
first. Otherwise the highest severity persistent message wins, the most
recent one within that severity. One board is built per session and handed
to the components that need it.
"""

from collections.abc import Callable, Iterable
import math
from datetime import UTC, datetime, timedelta
from typing import Any

from signalboard.history.recorder import EntryRecorder
from signalboard.history.ring import DEFAULT_CAPACITY, RingBuffer
from signalboard.hub import SubscriptionHub, Unsubscribe
from signalboard.models import HistoryRecord, Severity, SlotMessage, utc_now
from signalboard.observability.logging import get_logger
from signalboard.observability.metrics import ACTIVE_SLOTS, SLOT_CLEARS, SLOT_WRITES
from signalboard.sinks import ConsoleSink
from signalboard.status.resolver import resolve_visible
from signalboard.status.scheduler import ExpirationScheduler, TimerFactory, loop_timer
from signalboard.status.store import SlotStore

logger = get_logger(__name__)

DEFAULT_FLASH_MS = 3000

LATEST_EXPIRY = datetime.max.replace(tzinfo=UTC)


def expiry_after(now: datetime, timeout_ms: float) -> datetime:
    """Expiry instant ``timeout_ms`` milliseconds after ``now``.

    NaN and non-positive timeouts expire at ``now``; timeouts past the
    datetime range, infinity included, expire at ``LATEST_EXPIRY``.
    """
    if math.isnan(timeout_ms) or timeout_ms <= 0:
        return now
    try:
        return now + timedelta(milliseconds=timeout_ms)
    except OverflowError:
        return LATEST_EXPIRY


class StatusBoard:
    """Bounded audit history plus a single prioritised status message."""

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        *,
        sink: ConsoleSink | None = None,
        clock: Callable[[], datetime] = utc_now,
        timer: TimerFactory = loop_timer,
        max_slots: int | None = None,
        default_flash_ms: int = DEFAULT_FLASH_MS,
    ) -> None:
        """Initialize the board.

        Args:
            capacity: Number of history records kept
            sink: Console-like pass-through, structlog by default
            clock: Source of the current time (UTC)
            timer: Factory arming the expiry timer, asyncio by default
            max_slots: Upper bound on stored slots, None for unbounded
            default_flash_ms: Timeout used by ``flash`` when none is given
        """
        self._clock = clock
        self._default_flash_ms = default_flash_ms
        self._ring = RingBuffer(capacity)
        self._recorder = EntryRecorder(self._ring, sink)
        self._slots = SlotStore(max_slots)
        self._hub = SubscriptionHub()
        self._scheduler = ExpirationScheduler(
            self._slots,
            self._publish_visibility,
            clock=clock,
            timer=timer,
        )
        self._resolved_at = clock()

    # Persistent status

    def error(self, slot: str, *args: Any) -> SlotMessage:
        """Post a persistent error to ``slot``."""
        return self.post(Severity.ERROR, slot, *args)

    def warn(self, slot: str, *args: Any) -> SlotMessage:
        """Post a persistent warning to ``slot``."""
        return self.post(Severity.WARN, slot, *args)

    def info(self, slot: str, *args: Any) -> SlotMessage:
        """Post a persistent info message to ``slot``."""
        return self.post(Severity.INFO, slot, *args)

    def debug(self, slot: str, *args: Any) -> SlotMessage:
        """Post a persistent debug message to ``slot``."""
        return self.post(Severity.DEBUG, slot, *args)

    def post(self, severity: Severity, slot: str, *args: Any) -> SlotMessage:
        """Write a persistent message to ``slot``, replacing what was there."""
        return self._write(severity, slot, None, args)

    # Transient status

    def error_flash(self, timeout_ms: float, slot: str, *args: Any) -> SlotMessage:
        """Flash an error in ``slot`` for ``timeout_ms`` milliseconds."""
        return self.flash(Severity.ERROR, slot, *args, timeout_ms=timeout_ms)

    def warn_flash(self, timeout_ms: float, slot: str, *args: Any) -> SlotMessage:
        """Flash a warning in ``slot`` for ``timeout_ms`` milliseconds."""
        return self.flash(Severity.WARN, slot, *args, timeout_ms=timeout_ms)

    def info_flash(self, timeout_ms: float, slot: str, *args: Any) -> SlotMessage:
        """Flash an info message in ``slot`` for ``timeout_ms`` milliseconds."""
        return self.flash(Severity.INFO, slot, *args, timeout_ms=timeout_ms)

    def flash(
        self,
        severity: Severity,
        slot: str,
        *args: Any,
        timeout_ms: float | None = None,
    ) -> SlotMessage:
        """Write a transient message that stops being visible after ``timeout_ms``.

        A non-positive or NaN timeout produces a message that is already
        expired: it is recorded in history but never shown. A timeout too
        large to represent, infinity included, is clamped to the latest
        representable instant.
        """
        if timeout_ms is None:
            timeout_ms = self._default_flash_ms
        return self._write(severity, slot, timeout_ms, args)

    # History only

    def log(self, severity: Severity, category: str, *args: Any) -> HistoryRecord:
        """Record an entry in history without touching any slot."""
        record = self._recorder.record(severity, category, args, self._clock())
        self._publish_history()
        return record

    # Queries

    def current_visible(self) -> SlotMessage | None:
        """The message a status surface should show right now, if any."""
        return resolve_visible(self._slots.messages(), self._clock())

    def history(self) -> list[HistoryRecord]:
        return self._ring.snapshot()

    def filter_history(
        self,
        severities: Iterable[Severity] | None = None,
        categories: Iterable[str] | None = None,
    ) -> list[HistoryRecord]:
        return self._ring.filter(severities, categories)

    def export_history(self) -> str:
        """History as a JSON array with ISO-8601 timestamps."""
        return self._ring.export_json()

    def render_history(self) -> list[str]:
        return self._ring.render_lines()

    @property
    def slot_count(self) -> int:
        return len(self._slots)

    @property
    def next_expiry(self) -> datetime | None:
        """Expiry instant the scheduler is currently armed for."""
        return self._scheduler.target

    # Management

    def clear_slot(self, slot: str | None = None, severity: Severity | None = None) -> int:
        """Remove matching slot messages and return how many were removed.

        Clearing is not a log event: only visibility subscribers are notified.
        """
        removed = self._slots.clear(slot, severity)
        if removed:
            SLOT_CLEARS.labels(reason="clear").inc(removed)
            logger.debug(
                "slot_cleared",
                slot=slot,
                severity=severity.value if severity else None,
                removed=removed,
            )
        ACTIVE_SLOTS.set(len(self._slots))
        self._publish_visibility()
        self._scheduler.reschedule(after=self._resolved_at)
        return removed

    def clear_history(self) -> None:
        self._ring.clear()
        self._publish_history()

    def prune_expired(self) -> int:
        """Drop expired transient messages from the store.

        Visibility is unchanged, so nobody is notified.
        """
        removed = self._slots.prune_expired(self._clock())
        if removed:
            SLOT_CLEARS.labels(reason="expired").inc(removed)
            ACTIVE_SLOTS.set(len(self._slots))
        return removed

    def close(self) -> None:
        """Cancel the pending expiry timer."""
        self._scheduler.cancel()

    # Subscriptions

    def on_history_change(
        self, callback: Callable[[list[HistoryRecord]], None]
    ) -> Unsubscribe:
        return self._hub.history.subscribe(callback)

    def on_visibility_change(
        self, callback: Callable[[SlotMessage | None], None]
    ) -> Unsubscribe:
        return self._hub.visibility.subscribe(callback)

    # Internals

    def _write(
        self,
        severity: Severity,
        slot: str,
        timeout_ms: float | None,
        args: tuple[Any, ...],
    ) -> SlotMessage:
        now = self._clock()
        expires_at = expiry_after(now, timeout_ms) if timeout_ms is not None else None
        record = self._recorder.record(severity, slot, args, now)
        message = self._slots.write(severity, slot, expires_at, args, record.text, now)

        SLOT_WRITES.labels(
            severity=severity.value,
            kind="transient" if message.is_transient else "persistent",
        ).inc()
        ACTIVE_SLOTS.set(len(self._slots))
        logger.debug(
            "slot_written",
            slot=slot,
            severity=severity.value,
            expires_at=expires_at.isoformat() if expires_at else None,
        )

        self._publish_history()
        self._publish_visibility()
        self._scheduler.reschedule(after=self._resolved_at)
        return message

    def _publish_history(self) -> None:
        self._hub.history.publish(self._ring.snapshot())

    def _publish_visibility(self) -> datetime:
        now = self._clock()
        self._resolved_at = now
        self._hub.visibility.publish(resolve_visible(self._slots.messages(), now))
        return now
