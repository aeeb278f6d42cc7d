"""HistoryRecord model for the audit history."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from signalboard.models.enums import Severity


def utc_now() -> datetime:
    """Return current UTC time."""
    return datetime.now(UTC)


class HistoryRecord(BaseModel):
    """One entry of the audit history.

    Created by every leveled call and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    created_at: datetime = Field(default_factory=utc_now, description="Record time")
    severity: Severity = Field(..., description="Severity of the call")
    category: str = Field(..., description="Category, the slot key for status calls")
    text: str = Field(..., description="Formatted message")
    raw_args: tuple[Any, ...] = Field(
        default=(), description="Arguments as passed by the caller"
    )
