"""Enums for the signalboard domain."""

from enum import Enum


class Severity(str, Enum):
    """Message severity, declared from highest to lowest priority.

    - ERROR: Something failed and needs attention
    - WARN: Degraded but working
    - INFO: Normal progress feedback
    - DEBUG: Diagnostic detail
    """

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    @property
    def rank(self) -> int:
        """Priority rank, 0 being the highest."""
        return _RANKS[self]

    @property
    def log_method(self) -> str:
        """Name of the structlog method used for console pass-through."""
        return "warning" if self is Severity.WARN else self.value

    @classmethod
    def by_priority(cls) -> list["Severity"]:
        """All severities, highest priority first."""
        return sorted(cls, key=lambda s: s.rank)


_RANKS = {severity: index for index, severity in enumerate(Severity)}
