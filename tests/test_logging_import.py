"""
Test that monitor_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from monitor_logging and use the logger."""
    from chainhook_monitor.monitor_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_bind_contract_logger():
    """bind_contract returns a usable logger with the contract bound."""
    from chainhook_monitor.monitor_logging import bind_contract

    logger = bind_contract("SP000.test")
    logger.info("test_bound_message", extra="x")


def test_event_name_moved_to_event_type():
    """The positional event name lands under event_type; other keys are untouched."""
    from chainhook_monitor.monitor_logging.logger import event_name_as_event_type

    out = event_name_as_event_type(None, "info", {"event": "events_stored", "total": 3})
    assert out == {"event_type": "events_stored", "total": 3}


def test_timestamp_added_once():
    """A UTC timestamp is added, but an explicit one is kept."""
    from chainhook_monitor.monitor_logging.logger import stamp_utc

    assert stamp_utc(None, "info", {})["timestamp"].endswith("+00:00")
    assert stamp_utc(None, "info", {"timestamp": "fixed"})["timestamp"] == "fixed"
