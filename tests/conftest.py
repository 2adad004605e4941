"""
Pytest fixtures for Chainhook Monitor tests. Every app gets its own in-memory store
and registration is disabled so no test talks to the Hiro API.
"""

from __future__ import annotations

import pytest

CONTRACT = "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7.counter"


@pytest.fixture
def settings():
    """Settings for a test app: small defaults, registration off."""
    from chainhook_monitor.config.settings import Settings

    return Settings(
        hiro_api_key="test-api-key",
        contract_identifier=CONTRACT,
        webhook_base_url="https://monitor.example.com/",
        register_on_startup=False,
    )


@pytest.fixture
def store(settings):
    from chainhook_monitor.event_store.store import EventStore

    return EventStore(settings.max_events)


@pytest.fixture
def client(settings, store):
    """FastAPI TestClient over a fresh app and store."""
    from fastapi.testclient import TestClient

    from chainhook_monitor.api_server.app import create_app

    return TestClient(create_app(settings, store=store))


@pytest.fixture
def make_record():
    """Factory for EventRecord objects with test defaults."""
    from chainhook_monitor.chainhook_listener.models import EventRecord

    def _make(**overrides):
        fields = {"contract_id": CONTRACT}
        fields.update(overrides)
        return EventRecord.create(**fields)

    return _make
