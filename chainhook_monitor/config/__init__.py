"""
Configuration management for Chainhook Monitor.

Loads and validates settings from environment variables and an optional
.env file. Exposes a single source of truth for service configuration.
"""

from chainhook_monitor.config.settings import Settings, load_settings  # noqa: F401

__all__ = ["Settings", "load_settings"]
