"""
Summary statistics over stored events.

Recomputed from a store snapshot on every query; the store is small and
bounded so nothing is maintained incrementally.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable

from chainhook_monitor.chainhook_listener.models import EventRecord


@dataclass(frozen=True)
class EventStats:
    """Counters derived from a set of event records."""

    total: int
    unique_senders: int
    success_count: int
    failure_count: int
    method_counts: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Dashboard shape used by GET /stats."""
        return {
            "totalInteractions": self.total,
            "uniqueSenders": self.unique_senders,
            "successfulTransactions": self.success_count,
            "failedTransactions": self.failure_count,
            "methodBreakdown": dict(self.method_counts),
        }


def compute_stats(records: Iterable[EventRecord]) -> EventStats:
    """
    Aggregate records into EventStats.

    The "unknown" sender and method sentinels count like any other value.
    """
    total = 0
    successes = 0
    senders: set[str] = set()
    methods: Counter[str] = Counter()
    for record in records:
        total += 1
        senders.add(record.sender)
        methods[record.method] += 1
        if record.success:
            successes += 1
    return EventStats(
        total=total,
        unique_senders=len(senders),
        success_count=successes,
        failure_count=total - successes,
        method_counts=dict(methods),
    )
