"""Fixed-capacity history of records, oldest evicted first."""

import json
from collections import deque
from collections.abc import Iterable, Iterator

from signalboard.history.formatting import format_arg
from signalboard.models import HistoryRecord, Severity

DEFAULT_CAPACITY = 100


class RingBuffer:
    """Fixed-size buffer retaining the most recent :class:`HistoryRecord` objects."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._records: deque[HistoryRecord] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, record: HistoryRecord) -> HistoryRecord | None:
        """Append a record, returning the evicted oldest record if any."""
        self._records.append(record)
        evicted = None
        while len(self._records) > self._capacity:
            evicted = self._records.popleft()
        return evicted

    def snapshot(self) -> list[HistoryRecord]:
        """Return a copy of the current contents, oldest first."""
        return list(self._records)

    def filter(
        self,
        severities: Iterable[Severity] | None = None,
        categories: Iterable[str] | None = None,
    ) -> list[HistoryRecord]:
        """Return the records matching both filters.

        A missing or empty filter matches everything for its dimension.
        """
        wanted_severities = set(severities or ())
        wanted_categories = set(categories or ())
        return [
            record
            for record in self._records
            if (not wanted_severities or record.severity in wanted_severities)
            and (not wanted_categories or record.category in wanted_categories)
        ]

    def clear(self) -> None:
        self._records.clear()

    def export_json(self) -> str:
        """Serialize all records as an indented JSON array.

        Each entry carries an ISO-8601 ``timestamp``, ``severity``,
        ``category``, ``text`` and the formatted ``args``.
        """
        payload = [
            {
                "timestamp": record.created_at.isoformat(),
                "severity": record.severity.value,
                "category": record.category,
                "text": record.text,
                "args": [format_arg(arg) for arg in record.raw_args],
            }
            for record in self._records
        ]
        return json.dumps(payload, indent=2)

    def render_lines(self) -> list[str]:
        """Render one plain-text line per record for log viewers."""
        return [
            f"[{record.created_at.isoformat()}] "
            f"{record.severity.value.upper()} {record.category}: {record.text}"
            for record in self._records
        ]

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
