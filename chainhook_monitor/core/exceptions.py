"""
Application-level exceptions.

ConfigError is fatal at startup. PayloadShapeError never leaves the
normalizer; it is turned into a degraded event record. RegistrationError
is logged and the server keeps running.
"""

from __future__ import annotations


class ChainhookMonitorError(Exception):
    """Base class for all Chainhook Monitor errors."""


class ConfigError(ChainhookMonitorError):
    """Required configuration missing or invalid."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


class PayloadShapeError(ChainhookMonitorError):
    """A value in a webhook payload has a JSON type the normalizer cannot use."""

    def __init__(self, field: str, expected: str, value: object) -> None:
        super().__init__(f"{field}: expected {expected}, got {type(value).__name__}")
        self.field = field
        self.expected = expected


class RegistrationError(ChainhookMonitorError):
    """Chainhook registration call failed (transport error or non-2xx)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
