"""Configuration model exports.

    from signalboard.config.models import StatusConfig, LoggingConfig
"""

from signalboard.config.models.observability import LoggingConfig, ObservabilityConfig
from signalboard.config.models.status import StatusConfig

__all__ = [
    # Observability
    "LoggingConfig",
    "ObservabilityConfig",
    # Status
    "StatusConfig",
]
