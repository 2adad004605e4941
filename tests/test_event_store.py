"""
Pytest tests for the bounded, newest-first event store.
"""

from __future__ import annotations

import threading

import pytest

from chainhook_monitor.event_store import DEFAULT_CAPACITY, EventStore


def test_default_capacity():
    assert EventStore().capacity == DEFAULT_CAPACITY == 100


def test_invalid_capacity():
    with pytest.raises(ValueError, match="positive"):
        EventStore(0)


def test_append_newest_first_and_eviction(make_record):
    """Capacity 2: append [r1], then [r2, r3] -> [r3, r2], r1 evicted."""
    store = EventStore(2)
    r1, r2, r3 = (make_record(transaction_id=t) for t in ("r1", "r2", "r3"))
    assert store.append([r1]) == 1
    assert store.append([r2, r3]) == 2
    assert store.all() == [r3, r2]


def test_store_bound_keeps_most_recent(make_record):
    """Across batches totalling more than C, exactly the C most recent survive, newest first."""
    store = EventStore(5)
    appended = []
    for batch_size in (3, 4, 2, 6):
        batch = [make_record(transaction_id=f"tx{len(appended) + i}") for i in range(batch_size)]
        appended.extend(batch)
        store.append(batch)
        assert len(store) <= 5
    assert len(store.all()) == 5
    assert store.all() == list(reversed(appended))[:5]


def test_append_empty_batch(make_record):
    store = EventStore(3)
    store.append([make_record()])
    assert store.append([]) == 1
    assert len(store) == 1


def test_recent_limits(make_record):
    store = EventStore(4)
    records = [make_record(transaction_id=str(i)) for i in range(6)]
    store.append(records)
    assert [r.transaction_id for r in store.recent(2)] == ["5", "4"]
    assert len(store.recent(1000)) == 4
    assert store.recent(0) == []
    assert store.recent(-3) == []


def test_recent_on_small_store(make_record):
    store = EventStore(10)
    store.append([make_record(), make_record()])
    assert len(store.recent(5)) == 2


def test_all_returns_snapshot(make_record):
    store = EventStore(3)
    store.append([make_record()])
    snapshot = store.all()
    store.append([make_record()])
    assert len(snapshot) == 1
    assert len(store) == 2


def test_concurrent_appends_stay_bounded(make_record):
    store = EventStore(50)
    records = [make_record() for _ in range(20)]

    def worker():
        for _ in range(25):
            store.append(records)
            assert len(store.all()) <= 50

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store) == 50
