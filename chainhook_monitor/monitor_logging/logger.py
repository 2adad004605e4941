"""
structlog setup for the monitor.

Every line is one JSON object keyed by event_type, so webhook ingest,
store and registration logs can be filtered by event name and by the
bound contract. Callers pass a snake_case event name and keyword context:

    logger = get_logger(__name__)
    logger.info("events_stored", stored=3, total=42)

    {"event_type": "events_stored", "stored": 3, "total": 42,
     "level": "info", "logger": "chainhook_monitor...", "timestamp": "..."}

LOG_LEVEL filters below the given level. LOG_FORMAT=console switches to the
coloured dev renderer for local runs. Imports nothing from chainhook_monitor.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

EventDict = dict[str, Any]


def stamp_utc(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add an ISO 8601 UTC timestamp unless the caller supplied one."""
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def event_name_as_event_type(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Move structlog's positional event name to event_type.

    The webhook handler logs fields such as txid and method; keeping the
    name under its own key means none of them can collide with it.
    """
    name = event_dict.pop("event", None)
    if name is not None:
        event_dict.setdefault("event_type", name)
    return event_dict


def _renderer() -> Any:
    if LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_structlog() -> None:
    """Install the monitor's processor chain; runs once at import."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            stamp_utc,
            event_name_as_event_type,
            _renderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """Module logger; the module name is carried in the `logger` key."""
    return structlog.get_logger(name).bind(logger=name)


def bind_contract(contract_id: str) -> structlog.BoundLogger:
    """Service-level logger with the monitored contract on every line."""
    return get_logger("chainhook_monitor").bind(contract=contract_id)
