"""History and status line configuration."""

from pydantic import BaseModel, Field


class StatusConfig(BaseModel):
    """Sizing and timing of a status board.

    Slot keys are free-form; an application typically uses one slot per
    region of its interface.
    """

    history_capacity: int = Field(
        default=100,
        ge=1,
        description="Number of history records kept before the oldest is evicted",
    )
    default_flash_ms: int = Field(
        default=3000,
        ge=0,
        description="Timeout for flash messages posted without one",
    )
    max_slots: int | None = Field(
        default=None,
        ge=1,
        description="Upper bound on stored slots (None = unbounded)",
    )
    console_passthrough: bool = Field(
        default=True,
        description="Echo every recorded call to the structlog console logger",
    )
