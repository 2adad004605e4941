"""
HTTP middleware — CORS for the dashboard and request logging.
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from chainhook_monitor.config.settings import Settings
from chainhook_monitor.monitor_logging import get_logger

logger = get_logger(__name__)


def install_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach CORS (dashboard runs on another origin) and per-request timing logs."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        logger.debug(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
