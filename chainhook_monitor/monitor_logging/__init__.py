"""
Structured logging for Chainhook Monitor.

JSON logs with timestamp, event_type, level and logger name.
Use get_logger() in every module for aggregation-friendly output.
"""

from chainhook_monitor.monitor_logging.logger import bind_contract, get_logger

__all__ = ["bind_contract", "get_logger"]
