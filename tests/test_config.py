"""
Pytest tests for settings loading and validation.
"""

from __future__ import annotations

import pytest

from chainhook_monitor.config import load_settings
from chainhook_monitor.config.env import DEFAULT_CHAINHOOK_API_URL
from chainhook_monitor.core.exceptions import ConfigError

REQUIRED = {
    "HIRO_API_KEY": "key",
    "CONTRACT_IDENTIFIER": "SP000.contract",
    "WEBHOOK_BASE_URL": "https://example.com",
}


def test_defaults():
    s = load_settings(dict(REQUIRED))
    assert s.hiro_api_key == "key"
    assert s.contract_identifier == "SP000.contract"
    assert s.port == 3001
    assert s.host == "0.0.0.0"
    assert s.max_events == 100
    assert s.chainhook_api_url == DEFAULT_CHAINHOOK_API_URL
    assert s.chainhook_auth_token == "chainhook-secret"
    assert s.network == "mainnet"
    assert s.register_on_startup is True
    assert s.cors_origins == ("*",)
    assert s.webhook_url == "https://example.com/webhook"


def test_missing_required_reported_together():
    with pytest.raises(ConfigError) as exc_info:
        load_settings({"HIRO_API_KEY": "  "})
    assert exc_info.value.missing == ["HIRO_API_KEY", "CONTRACT_IDENTIFIER", "WEBHOOK_BASE_URL"]
    assert "CONTRACT_IDENTIFIER" in str(exc_info.value)


def test_overrides():
    env = dict(REQUIRED)
    env.update({
        "PORT": "8080",
        "MAX_EVENTS": "25",
        "CHAINHOOK_REGISTER": "off",
        "CHAINHOOK_NETWORK": "testnet",
        "CORS_ORIGINS": "http://localhost:5173, https://dash.example.com",
    })
    s = load_settings(env)
    assert s.port == 8080
    assert s.max_events == 25
    assert s.register_on_startup is False
    assert s.network == "testnet"
    assert s.cors_origins == ("http://localhost:5173", "https://dash.example.com")


@pytest.mark.parametrize("name, value", [("PORT", "abc"), ("PORT", "0"), ("MAX_EVENTS", "-5")])
def test_invalid_integers(name, value):
    env = dict(REQUIRED)
    env[name] = value
    with pytest.raises(ConfigError, match=name):
        load_settings(env)


def test_process_environment(monkeypatch):
    for key, value in REQUIRED.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("PORT", "4000")
    s = load_settings()
    assert s.port == 4000
    assert s.contract_identifier == "SP000.contract"
