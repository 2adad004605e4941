"""
Chainhook listener package.

Turns Chainhook webhook payloads (any of the provider's historical wire
formats) into uniform EventRecord objects for the event store.
"""

from chainhook_monitor.chainhook_listener.models import (
    PARSE_ERROR_TXID,
    UNKNOWN,
    EventRecord,
)
from chainhook_monitor.chainhook_listener.normalizer import normalize

__all__ = [
    "PARSE_ERROR_TXID",
    "UNKNOWN",
    "EventRecord",
    "normalize",
]
