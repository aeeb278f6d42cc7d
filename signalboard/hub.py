"""Synchronous broadcast channels for history and visibility changes."""

from collections.abc import Callable
from itertools import count
from typing import Generic, TypeVar

from signalboard.models import HistoryRecord, SlotMessage
from signalboard.observability.logging import get_logger
from signalboard.observability.metrics import SUBSCRIBER_ERRORS

logger = get_logger(__name__)

T = TypeVar("T")

Unsubscribe = Callable[[], None]


class Channel(Generic[T]):
    """Deliver each published payload to every current subscriber, in order.

    Delivery works on a snapshot of the subscribers taken when publishing
    starts, so a callback added during delivery only sees later payloads.
    A failing callback is logged and skipped.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscribers: dict[int, Callable[[T], None]] = {}
        self._tokens = count()

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscribe:
        """Register ``callback`` and return a function that removes it.

        Calling the returned function more than once is harmless.
        """
        token = next(self._tokens)
        self._subscribers[token] = callback

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def publish(self, payload: T) -> None:
        for token, callback in list(self._subscribers.items()):
            if token not in self._subscribers:
                # removed by an earlier callback during this delivery
                continue
            try:
                callback(payload)
            except Exception:
                SUBSCRIBER_ERRORS.labels(channel=self.name).inc()
                logger.warning(
                    "subscriber_failed",
                    channel=self.name,
                    callback=getattr(callback, "__qualname__", repr(callback)),
                    exc_info=True,
                )

    def __len__(self) -> int:
        return len(self._subscribers)


class SubscriptionHub:
    """The two independent channels observed by a status surface."""

    def __init__(self) -> None:
        self.history: Channel[list[HistoryRecord]] = Channel("history")
        self.visibility: Channel[SlotMessage | None] = Channel("visibility")
