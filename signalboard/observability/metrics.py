"""Prometheus metrics for signalboard.

Counts history and status traffic, expiry timer activity and swallowed
collaborator failures.
"""

from prometheus_client import Counter, Gauge

# History metrics
HISTORY_RECORDS = Counter(
    "signalboard_history_records_total",
    "Total number of history records appended",
    labelnames=["severity"],
)

HISTORY_EVICTIONS = Counter(
    "signalboard_history_evictions_total",
    "Total number of history records evicted by capacity",
)

# Status metrics
SLOT_WRITES = Counter(
    "signalboard_slot_writes_total",
    "Total number of slot writes",
    labelnames=["severity", "kind"],
)

SLOT_CLEARS = Counter(
    "signalboard_slot_clears_total",
    "Total number of slot messages removed by clear or prune",
    labelnames=["reason"],
)

SLOT_EVICTIONS = Counter(
    "signalboard_slot_evictions_total",
    "Total number of slot messages evicted by the slot bound",
)

ACTIVE_SLOTS = Gauge(
    "signalboard_active_slots",
    "Number of slot messages currently stored",
)

# Scheduler metrics
EXPIRY_TIMER_FIRES = Counter(
    "signalboard_expiry_timer_fires_total",
    "Total number of expiry timer firings",
)

# Error metrics
SINK_ERRORS = Counter(
    "signalboard_sink_errors_total",
    "Total number of console sink failures swallowed",
)

SUBSCRIBER_ERRORS = Counter(
    "signalboard_subscriber_errors_total",
    "Total number of subscriber callback failures swallowed",
    labelnames=["channel"],
)
