"""
Main entrypoint: validate configuration, then run the FastAPI server.

Exits with status 1 before binding a listener when HIRO_API_KEY,
CONTRACT_IDENTIFIER or WEBHOOK_BASE_URL is missing. Chainhook registration
runs in the background from the app lifespan; the server accepts webhooks
whether or not it succeeds.

Env: HIRO_API_KEY, CONTRACT_IDENTIFIER, WEBHOOK_BASE_URL, PORT (3001), HOST, MAX_EVENTS (100), LOG_LEVEL, etc.
"""

import os
import sys

# Configure structured JSON logging before other imports that may log
from chainhook_monitor.monitor_logging import get_logger

from chainhook_monitor.config import load_settings
from chainhook_monitor.core.exceptions import ConfigError

logger = get_logger("main")


def main() -> None:
    """Load settings, build the app and serve it with uvicorn."""
    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error("config_error", message=str(e), missing=e.missing)
        sys.exit(1)

    from chainhook_monitor.api_server.server import create_app
    import uvicorn

    app = create_app(settings)
    logger.info(
        "main_server_starting",
        host=settings.host,
        port=settings.port,
        contract=settings.contract_identifier,
        webhook_url=settings.webhook_url,
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=os.getenv("LOG_LEVEL", "info").lower())


if __name__ == "__main__":
    main()
