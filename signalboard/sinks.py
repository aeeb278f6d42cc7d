"""Console-like sinks receiving a pass-through of every recorded call."""

from collections.abc import Sequence
from typing import Any, Protocol

import structlog

from signalboard.history.formatting import format_args
from signalboard.models import Severity
from signalboard.observability.logging import get_logger


class ConsoleSink(Protocol):
    """Anything accepting ``(severity, category, args)`` for human tailing."""

    def __call__(
        self, severity: Severity, category: str, args: Sequence[Any]
    ) -> None: ...


class StructlogConsoleSink:
    """Forward recorded calls to structlog at the matching level.

    The formatted text becomes the event and the category is bound as
    context, so the configured renderer and PII redaction apply.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or get_logger("signalboard.console")

    def __call__(
        self, severity: Severity, category: str, args: Sequence[Any]
    ) -> None:
        emit = getattr(self._logger, severity.log_method)
        emit(format_args(args), category=category)


class NullSink:
    """Discards everything."""

    def __call__(
        self, severity: Severity, category: str, args: Sequence[Any]
    ) -> None:
        return None
