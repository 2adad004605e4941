"""
Chainhook registration — one outbound call to the Hiro Platform at startup.
"""

from chainhook_monitor.registration.client import (
    build_predicate,
    register_chainhook,
    try_register_chainhook,
)

__all__ = ["build_predicate", "register_chainhook", "try_register_chainhook"]
