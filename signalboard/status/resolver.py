"""Pick the single status message that should be visible."""

from collections.abc import Iterable
from datetime import datetime

from signalboard.models import Severity, SlotMessage


def resolve_visible(
    messages: Iterable[SlotMessage], now: datetime
) -> SlotMessage | None:
    """Resolve the visible message at ``now``.

    Expired transient messages are ignored. Any live transient message
    outranks every persistent one, and the most recently posted transient
    wins. Otherwise the highest severity present wins, and within that
    severity the most recently posted message wins.
    """
    live = [message for message in messages if not message.is_expired(now)]
    if not live:
        return None

    transient = [message for message in live if message.is_transient]
    if transient:
        return max(transient, key=lambda m: m.recency)

    for severity in Severity.by_priority():
        at_level = [message for message in live if message.severity == severity]
        if at_level:
            return max(at_level, key=lambda m: m.recency)
    return None
