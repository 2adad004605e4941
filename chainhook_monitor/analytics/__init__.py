"""
Analytics over the event store: summary statistics for the dashboard.
"""

from chainhook_monitor.analytics.stats import EventStats, compute_stats

__all__ = ["EventStats", "compute_stats"]
