"""Build a StatusBoard from configuration.

Example usage:

    from signalboard.bootstrap import bootstrap

    board = bootstrap()
    board.info("sync", "Connected")
"""

from collections.abc import Callable
from datetime import datetime

from signalboard.board import StatusBoard
from signalboard.config import get_settings
from signalboard.config.settings import Settings
from signalboard.models import utc_now
from signalboard.observability.logging import get_logger, setup_logging
from signalboard.sinks import ConsoleSink, NullSink
from signalboard.status.scheduler import TimerFactory, loop_timer

logger = get_logger(__name__)


def build_board(
    settings: Settings | None = None,
    *,
    sink: ConsoleSink | None = None,
    clock: Callable[[], datetime] = utc_now,
    timer: TimerFactory = loop_timer,
) -> StatusBoard:
    """Create a board sized and timed from ``settings``.

    Args:
        settings: Settings to use, defaults to a fresh Settings()
        sink: Overrides the console sink chosen from configuration
        clock: Source of the current time
        timer: Factory arming the expiry timer

    Returns:
        A new StatusBoard, to be passed to the components that need it
    """
    settings = settings or Settings()
    status = settings.status
    if sink is None and not status.console_passthrough:
        sink = NullSink()
    return StatusBoard(
        status.history_capacity,
        sink=sink,
        clock=clock,
        timer=timer,
        max_slots=status.max_slots,
        default_flash_ms=status.default_flash_ms,
    )


def bootstrap() -> StatusBoard:
    """Load settings from disk, configure logging and build a board."""
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )
    board = build_board(settings)
    logger.info(
        "status_board_ready",
        app_name=settings.app_name,
        history_capacity=settings.status.history_capacity,
        max_slots=settings.status.max_slots,
    )
    return board
