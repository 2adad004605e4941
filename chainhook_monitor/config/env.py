"""
Environment variable loading for Chainhook Monitor.

- HIRO_API_KEY: Hiro Platform API key (required)
- CONTRACT_IDENTIFIER: monitored contract, e.g. SP000...my-contract (required)
- WEBHOOK_BASE_URL: public base URL the provider posts to (required)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

# Project root: config is chainhook_monitor/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_CHAINHOOK_API_URL = "https://api.mainnet.hiro.so/chainhooks/v1/me/"
DEFAULT_CHAINHOOK_AUTH_TOKEN = "chainhook-secret"
DEFAULT_NETWORK = "mainnet"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def load_monitor_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides set variables."""
    load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str = "", environ: Mapping[str, str] | None = None) -> str:
    """Return a stripped env value, or default when unset or blank."""
    source = os.environ if environ is None else environ
    value = (source.get(name) or "").strip()
    return value or default


def env_bool(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Parse a boolean flag (1/true/yes/on, 0/false/no/off); anything else is the default."""
    raw = env_str(name, environ=environ).lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default
