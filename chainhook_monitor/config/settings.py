"""
Application settings and environment configuration.

Responsibilities:
- Read configuration from environment variables (after loading .env).
- Validate required settings and provide defaults for optional ones.
- Expose an immutable Settings object to the API server, registration
  client and entry point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from chainhook_monitor.config.env import (
    DEFAULT_CHAINHOOK_API_URL,
    DEFAULT_CHAINHOOK_AUTH_TOKEN,
    DEFAULT_NETWORK,
    env_bool,
    env_str,
    load_monitor_env,
)
from chainhook_monitor.core.exceptions import ConfigError

REQUIRED_VARS = ("HIRO_API_KEY", "CONTRACT_IDENTIFIER", "WEBHOOK_BASE_URL")

DEFAULT_PORT = 3001
DEFAULT_MAX_EVENTS = 100


@dataclass(frozen=True)
class Settings:
    """Validated runtime configuration."""

    hiro_api_key: str
    contract_identifier: str
    webhook_base_url: str
    port: int = DEFAULT_PORT
    host: str = "0.0.0.0"
    max_events: int = DEFAULT_MAX_EVENTS
    chainhook_api_url: str = DEFAULT_CHAINHOOK_API_URL
    chainhook_auth_token: str = DEFAULT_CHAINHOOK_AUTH_TOKEN
    network: str = DEFAULT_NETWORK
    register_on_startup: bool = True
    cors_origins: tuple[str, ...] = field(default=("*",))

    @property
    def webhook_url(self) -> str:
        """Delivery target registered with the provider."""
        return f"{self.webhook_base_url.rstrip('/')}/webhook"


def _positive_int(name: str, default: int, environ: Mapping[str, str] | None) -> int:
    raw = env_str(name, environ=environ)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment.

    When environ is None the process environment is used and .env is loaded
    first. Raises ConfigError naming every missing required variable.
    """
    if environ is None:
        load_monitor_env()

    missing = [name for name in REQUIRED_VARS if not env_str(name, environ=environ)]
    if missing:
        raise ConfigError(
            "Missing required environment variables: " + ", ".join(missing),
            missing=missing,
        )

    origins = tuple(
        o.strip() for o in env_str("CORS_ORIGINS", "*", environ=environ).split(",") if o.strip()
    )
    return Settings(
        hiro_api_key=env_str("HIRO_API_KEY", environ=environ),
        contract_identifier=env_str("CONTRACT_IDENTIFIER", environ=environ),
        webhook_base_url=env_str("WEBHOOK_BASE_URL", environ=environ),
        port=_positive_int("PORT", DEFAULT_PORT, environ),
        host=env_str("HOST", "0.0.0.0", environ=environ),
        max_events=_positive_int("MAX_EVENTS", DEFAULT_MAX_EVENTS, environ),
        chainhook_api_url=env_str("CHAINHOOK_API_URL", DEFAULT_CHAINHOOK_API_URL, environ=environ),
        chainhook_auth_token=env_str(
            "CHAINHOOK_AUTH_TOKEN", DEFAULT_CHAINHOOK_AUTH_TOKEN, environ=environ
        ),
        network=env_str("CHAINHOOK_NETWORK", DEFAULT_NETWORK, environ=environ),
        register_on_startup=env_bool("CHAINHOOK_REGISTER", True, environ=environ),
        cors_origins=origins or ("*",),
    )
