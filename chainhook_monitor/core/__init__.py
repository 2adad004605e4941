"""
Core utilities — shared exceptions and cross-cutting concerns.
"""

from chainhook_monitor.core.exceptions import (
    ChainhookMonitorError,
    ConfigError,
    PayloadShapeError,
    RegistrationError,
)

__all__ = [
    "ChainhookMonitorError",
    "ConfigError",
    "PayloadShapeError",
    "RegistrationError",
]
