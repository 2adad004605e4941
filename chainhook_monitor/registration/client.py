"""
Hiro Chainhooks registration client.

Builds the contract-call predicate for the monitored contract and POSTs it
to the provider. A failed registration is not fatal: the hook may already
exist from a previous run, and the webhook endpoint works either way.
"""

from __future__ import annotations

from typing import Any

import httpx

from chainhook_monitor.config.settings import Settings
from chainhook_monitor.core.exceptions import RegistrationError
from chainhook_monitor.monitor_logging import get_logger

logger = get_logger(__name__)

REQUEST_TIMEOUT_SEC = 30.0
ERROR_BODY_PREVIEW_CHARS = 500


def build_predicate(settings: Settings) -> dict[str, Any]:
    """Chainhooks v2 predicate: every method of the contract, delivered by HTTP POST."""
    return {
        "name": f"Monitor {settings.contract_identifier}",
        "version": "1",
        "chain": "stacks",
        "network": settings.network,
        "filters": {
            "events": [
                {
                    "type": "contract_call",
                    "contract_identifier": settings.contract_identifier,
                    "method": "*",
                }
            ]
        },
        "action": {
            "type": "http_post",
            "url": settings.webhook_url,
            "authorization_header": f"Bearer {settings.chainhook_auth_token}",
        },
        "options": {"enable_on_registration": True},
    }


def register_chainhook(
    settings: Settings,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """
    Register the predicate with the provider.

    Returns the provider's JSON response. Raises RegistrationError on
    transport failure or a non-2xx status.
    """
    predicate = build_predicate(settings)
    headers = {"Content-Type": "application/json", "x-api-key": settings.hiro_api_key}
    logger.info(
        "chainhook_register_start",
        contract=settings.contract_identifier,
        webhook_url=settings.webhook_url,
    )
    own_client = client is None
    http = client or httpx.Client(timeout=REQUEST_TIMEOUT_SEC)
    try:
        response = http.post(settings.chainhook_api_url, json=predicate, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise RegistrationError(f"Chainhook registration request failed: {e}") from e
    finally:
        if own_client:
            http.close()

    if not response.is_success:
        raise RegistrationError(
            f"HTTP {response.status_code}: {response.text[:ERROR_BODY_PREVIEW_CHARS]}",
            status_code=response.status_code,
        )
    try:
        result = response.json()
    except ValueError:
        result = {}
    if not isinstance(result, dict):
        result = {"response": result}
    logger.info(
        "chainhook_registered",
        contract=settings.contract_identifier,
        chainhook_id=result.get("id") or result.get("uuid") or "N/A",
    )
    return result


def try_register_chainhook(
    settings: Settings,
    client: httpx.Client | None = None,
) -> dict[str, Any] | None:
    """Register, logging a warning instead of raising; returns None on failure."""
    try:
        return register_chainhook(settings, client=client)
    except RegistrationError as e:
        logger.warning(
            "chainhook_register_failed",
            error=str(e),
            status_code=e.status_code,
            message="Server keeps running; the chainhook may already be registered",
        )
        return None
