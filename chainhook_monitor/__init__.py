"""
Chainhook Monitor — webhook receiver and dashboard API for one Stacks contract.

Receives Chainhook notifications, normalizes the provider's payload shapes
into event records, keeps a bounded window of recent events in memory and
serves the feed and summary statistics to a polling dashboard.
"""

__version__ = "0.1.0"
