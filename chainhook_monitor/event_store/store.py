"""
Bounded event store.

Keeps the most recent EventRecord objects, newest first, in a deque capped
at the retention capacity; inserting at the head evicts from the tail in
the same step. One lock guards mutation and snapshots so concurrent
handlers never observe a partially trimmed window.
"""

from __future__ import annotations

import threading
from collections import deque
from itertools import islice
from typing import Iterable

from chainhook_monitor.chainhook_listener.models import EventRecord

DEFAULT_CAPACITY = 100


class EventStore:
    """
    Fixed-capacity, newest-first container of event records.

    Records are prepended one at a time in the order given, so after
    append([r2, r3]) the head is r3. Nothing is persisted; contents live
    for the process lifetime.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._records: deque[EventRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def append(self, records: Iterable[EventRecord]) -> int:
        """Insert records at the head, evicting the oldest past capacity. Returns the store size."""
        with self._lock:
            for record in records:
                self._records.appendleft(record)
            return len(self._records)

    def recent(self, limit: int) -> list[EventRecord]:
        """Newest-first prefix of at most min(limit, capacity) records; limit <= 0 gives []."""
        count = min(limit, self._capacity)
        if count <= 0:
            return []
        with self._lock:
            return list(islice(self._records, count))

    def all(self) -> list[EventRecord]:
        """Snapshot of the full contents, newest first."""
        with self._lock:
            return list(self._records)
