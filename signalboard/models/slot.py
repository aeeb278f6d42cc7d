"""SlotMessage model for the status layer."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from signalboard.models.enums import Severity


class SlotMessage(BaseModel):
    """The latest status message posted to a slot.

    A message without ``expires_at`` is persistent and stays until it is
    replaced or cleared. A message with ``expires_at`` is transient and stops
    being visible once that instant is reached, although it stays stored.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    slot: str = Field(..., description="Slot key")
    severity: Severity = Field(..., description="Severity of the message")
    text: str = Field(..., description="Formatted message")
    raw_args: tuple[Any, ...] = Field(
        default=(), description="Arguments as passed by the caller"
    )
    posted_at: datetime = Field(..., description="Write time")
    expires_at: datetime | None = Field(
        default=None, description="Expiry instant, None for persistent messages"
    )
    sequence: int = Field(
        default=0, ge=0, description="Store write counter, orders equal timestamps"
    )

    @property
    def is_transient(self) -> bool:
        return self.expires_at is not None

    def is_expired(self, now: datetime) -> bool:
        """True once a transient message has reached its expiry."""
        return self.expires_at is not None and self.expires_at <= now

    @property
    def recency(self) -> tuple[datetime, int]:
        """Sort key, larger is more recent."""
        return (self.posted_at, self.sequence)
