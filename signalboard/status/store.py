"""In-memory slot store: at most one status message per slot."""

from collections.abc import Sequence
from datetime import datetime
from itertools import count
from typing import Any

from signalboard.models import Severity, SlotMessage
from signalboard.observability.logging import get_logger
from signalboard.observability.metrics import SLOT_EVICTIONS

logger = get_logger(__name__)


class SlotStore:
    """Map of slot key to the most recent message written there.

    Writes replace the previous message wholesale. Expired transient messages
    are kept until cleared, pruned or evicted by the optional ``max_slots``
    bound.
    """

    def __init__(self, max_slots: int | None = None) -> None:
        """Initialize empty storage.

        Args:
            max_slots: Upper bound on stored slots, None for unbounded
        """
        if max_slots is not None and max_slots <= 0:
            raise ValueError("max_slots must be positive")
        self._max_slots = max_slots
        self._slots: dict[str, SlotMessage] = {}
        self._sequence = count(1)

    def write(
        self,
        severity: Severity,
        slot: str,
        expires_at: datetime | None,
        args: Sequence[Any],
        text: str,
        now: datetime,
    ) -> SlotMessage:
        """Store a new message for ``slot`` and return it."""
        if slot not in self._slots:
            self._make_room(now)
        message = SlotMessage(
            slot=slot,
            severity=severity,
            text=text,
            raw_args=tuple(args),
            posted_at=now,
            expires_at=expires_at,
            sequence=next(self._sequence),
        )
        self._slots[slot] = message
        return message

    def get(self, slot: str) -> SlotMessage | None:
        return self._slots.get(slot)

    def messages(self) -> list[SlotMessage]:
        """Return a copy of all stored messages."""
        return list(self._slots.values())

    def expiries(self) -> list[datetime]:
        """Expiry instants of all stored transient messages."""
        return [m.expires_at for m in self._slots.values() if m.expires_at is not None]

    def clear(self, slot: str | None = None, severity: Severity | None = None) -> int:
        """Remove matching messages and return how many were removed.

        With ``slot`` only that slot is considered; without it every slot is.
        A ``severity`` further restricts removal to messages of that severity.
        """
        if slot is not None:
            message = self._slots.get(slot)
            if message is None or (severity is not None and message.severity != severity):
                return 0
            del self._slots[slot]
            return 1

        if severity is None:
            removed = len(self._slots)
            self._slots.clear()
            return removed

        doomed = [key for key, m in self._slots.items() if m.severity == severity]
        for key in doomed:
            del self._slots[key]
        return len(doomed)

    def prune_expired(self, now: datetime) -> int:
        """Drop transient messages that have expired."""
        doomed = [key for key, m in self._slots.items() if m.is_expired(now)]
        for key in doomed:
            del self._slots[key]
        return len(doomed)

    def _make_room(self, now: datetime) -> None:
        if self._max_slots is None or len(self._slots) < self._max_slots:
            return
        self.prune_expired(now)
        while len(self._slots) >= self._max_slots:
            oldest = min(self._slots.values(), key=lambda m: m.sequence)
            del self._slots[oldest.slot]
            SLOT_EVICTIONS.inc()
            logger.info(
                "slot_evicted",
                slot=oldest.slot,
                max_slots=self._max_slots,
            )

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, slot: object) -> bool:
        return slot in self._slots
