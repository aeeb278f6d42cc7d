"""Entry recorder: formats a call, appends it to history, echoes it to a sink."""

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from signalboard.history.formatting import format_args
from signalboard.history.ring import RingBuffer
from signalboard.models import HistoryRecord, Severity
from signalboard.observability.logging import get_logger
from signalboard.observability.metrics import (
    HISTORY_EVICTIONS,
    HISTORY_RECORDS,
    SINK_ERRORS,
)
from signalboard.sinks import ConsoleSink, StructlogConsoleSink

logger = get_logger(__name__)


class EntryRecorder:
    """Build history records and keep the console sink informed.

    Sink failures are logged and counted but never reach the caller:
    recording must not change the caller's control flow.
    """

    def __init__(self, ring: RingBuffer, sink: ConsoleSink | None = None) -> None:
        """Initialize the recorder.

        Args:
            ring: Buffer receiving every record
            sink: Console-like pass-through, structlog by default
        """
        self._ring = ring
        self._sink: ConsoleSink = sink if sink is not None else StructlogConsoleSink()

    @property
    def ring(self) -> RingBuffer:
        return self._ring

    def record(
        self,
        severity: Severity,
        category: str,
        args: Sequence[Any],
        now: datetime,
    ) -> HistoryRecord:
        """Append a record for one leveled call and return it."""
        record = HistoryRecord(
            created_at=now,
            severity=severity,
            category=category,
            text=format_args(args),
            raw_args=tuple(args),
        )
        evicted = self._ring.append(record)
        HISTORY_RECORDS.labels(severity=severity.value).inc()
        if evicted is not None:
            HISTORY_EVICTIONS.inc()
            logger.debug(
                "history_record_evicted",
                category=evicted.category,
                capacity=self._ring.capacity,
            )

        self._forward(severity, category, tuple(args) if args else (record.text,))
        return record

    def _forward(
        self, severity: Severity, category: str, args: tuple[Any, ...]
    ) -> None:
        try:
            self._sink(severity, category, args)
        except Exception:
            SINK_ERRORS.inc()
            logger.warning(
                "console_sink_failed",
                category=category,
                severity=severity.value,
                exc_info=True,
            )
