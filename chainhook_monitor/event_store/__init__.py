"""
In-memory event store: bounded, newest-first window of EventRecord objects.
"""

from chainhook_monitor.event_store.store import DEFAULT_CAPACITY, EventStore

__all__ = ["DEFAULT_CAPACITY", "EventStore"]
