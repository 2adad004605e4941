"""
FastAPI server — webhook ingest plus read-only dashboard API.

POST /webhook normalizes a Chainhook payload and stores the records.
GET /events returns the newest records (raw payloads never leave the
process), GET /stats recomputes summary counters, GET /health is the
liveness check. Config via env (see chainhook_monitor.config).
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from chainhook_monitor import __version__
from chainhook_monitor.analytics.stats import compute_stats
from chainhook_monitor.api_server.middleware import install_middleware
from chainhook_monitor.chainhook_listener.fields import lookup
from chainhook_monitor.chainhook_listener.models import EventRecord
from chainhook_monitor.chainhook_listener.normalizer import normalize
from chainhook_monitor.config.settings import Settings, load_settings
from chainhook_monitor.event_store.store import EventStore
from chainhook_monitor.monitor_logging import bind_contract, get_logger
from chainhook_monitor.registration.client import try_register_chainhook

logger = get_logger(__name__)

DEFAULT_EVENTS_LIMIT = 50
REGISTRATION_JOIN_TIMEOUT_SEC = 5.0
LOG_ID_CHARS = 16


# -----------------------------------------------------------------------------
# Response models (camelCase on the wire)
# -----------------------------------------------------------------------------


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(_WireModel):
    """GET /health response."""

    status: str = Field(..., description="Always 'healthy' while the process serves requests")
    timestamp: datetime = Field(..., description="Server time (UTC)")
    contract: str = Field(..., description="Monitored contract identifier")
    events_count: int = Field(..., ge=0, description="Records currently retained")


class WebhookResponse(_WireModel):
    """POST /webhook response."""

    success: bool = Field(True)
    events_processed: int = Field(..., ge=0, description="Records extracted from the payload")


class EventItem(_WireModel):
    """Externally visible projection of an EventRecord."""

    id: str
    txid: str
    sender: str
    block_height: int = Field(..., ge=0)
    method: str
    success: bool
    timestamp: datetime

    @classmethod
    def from_record(cls, record: EventRecord) -> "EventItem":
        return cls(
            id=record.id,
            txid=record.transaction_id,
            sender=record.sender,
            block_height=record.block_height,
            method=record.method,
            success=record.success,
            timestamp=record.timestamp,
        )


class EventsResponse(_WireModel):
    """GET /events response, newest first."""

    success: bool = Field(True)
    contract: str
    total_events: int = Field(..., ge=0, description="Records currently retained")
    events: list[EventItem] = Field(default_factory=list)


class StatsBody(_WireModel):
    total_interactions: int
    unique_senders: int
    successful_transactions: int
    failed_transactions: int
    method_breakdown: dict[str, int] = Field(default_factory=dict)


class StatsResponse(_WireModel):
    """GET /stats response."""

    success: bool = Field(True)
    contract: str
    stats: StatsBody


# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


def get_store(request: Request) -> EventStore:
    """Dependency: the process-wide event store."""
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    """Dependency: settings the app was built with."""
    return request.app.state.settings


def parse_limit(raw: str | None, capacity: int) -> int:
    """
    Resolve the ?limit= query value.

    Missing, non-integer, zero or negative -> DEFAULT_EVENTS_LIMIT; clamped to capacity.
    """
    try:
        limit = int(raw) if raw is not None else DEFAULT_EVENTS_LIMIT
    except ValueError:
        limit = DEFAULT_EVENTS_LIMIT
    if limit < 1:
        limit = DEFAULT_EVENTS_LIMIT
    return min(limit, capacity)


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error})


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Liveness check: API is up, with the current retention count."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        contract=settings.contract_identifier,
        events_count=len(store),
    )


@router.post("/webhook", response_model=WebhookResponse)
async def webhook(
    request: Request,
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    Ingest one Chainhook notification.

    Payloads that match no known format still return success with
    eventsProcessed=0; a payload that cannot be parsed is stored as one
    parse-error record. Only faults outside normalization return 500.
    """
    try:
        payload = await request.json()
    except (ValueError, RecursionError) as e:
        logger.warning(
            "webhook_invalid_json",
            content_type=request.headers.get("content-type"),
            error_type=type(e).__name__,
        )
        return _error_response(400, "Request body is not valid JSON")

    try:
        logger.info(
            "webhook_received",
            streaming=lookup(payload, ("chainhook", "is_streaming_blocks")) is True,
        )
        records = normalize(payload, settings.contract_identifier)
        for record in records:
            logger.info(
                "event_parsed",
                txid=record.transaction_id[:LOG_ID_CHARS],
                sender=record.sender[:LOG_ID_CHARS],
                block_height=record.block_height,
                method=record.method,
            )
        total = store.append(records)
        logger.info("events_stored", stored=len(records), total=total)
        return WebhookResponse(success=True, events_processed=len(records))
    except Exception as e:
        logger.exception("webhook_processing_failed", error=str(e))
        return _error_response(500, str(e) or type(e).__name__)


@router.get("/events", response_model=EventsResponse)
def list_events(
    limit: str | None = Query(
        None,
        description=f"Max events to return (default {DEFAULT_EVENTS_LIMIT}, capped at retention capacity)",
    ),
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> EventsResponse:
    """Newest-first slice of the retained events; raw payloads are not exposed."""
    records = store.recent(parse_limit(limit, store.capacity))
    return EventsResponse(
        success=True,
        contract=settings.contract_identifier,
        total_events=len(store),
        events=[EventItem.from_record(r) for r in records],
    )


@router.get("/stats", response_model=StatsResponse)
def stats(
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> StatsResponse:
    """Summary counters recomputed from the current store contents."""
    computed = compute_stats(store.all())
    return StatsResponse(
        success=True,
        contract=settings.contract_identifier,
        stats=StatsBody.model_validate(computed.to_dict()),
    )


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------


def _start_registration(settings: Settings) -> threading.Thread:
    thread = threading.Thread(
        target=try_register_chainhook,
        args=(settings,),
        name="chainhook-registration",
        daemon=True,
    )
    thread.start()
    return thread


def create_app(settings: Settings | None = None, store: EventStore | None = None) -> FastAPI:
    """
    Build the ASGI app.

    Args:
        settings: Runtime configuration; read from the environment when None
            (raises ConfigError if required variables are missing).
        store: Event store to serve; a new one sized to settings.max_events when None.
    """
    settings = settings or load_settings()
    store = store if store is not None else EventStore(settings.max_events)
    contract_logger = bind_contract(settings.contract_identifier)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Kick off chainhook registration in the background; webhooks are accepted immediately."""
        thread = _start_registration(settings) if settings.register_on_startup else None
        contract_logger.info(
            "server_ready",
            webhook_url=settings.webhook_url,
            capacity=store.capacity,
            registering=thread is not None,
        )
        yield
        if thread is not None:
            thread.join(timeout=REGISTRATION_JOIN_TIMEOUT_SEC)
            if thread.is_alive():
                contract_logger.warning(
                    "chainhook_registration_shutdown_timeout",
                    timeout_sec=REGISTRATION_JOIN_TIMEOUT_SEC,
                )
        contract_logger.info("server_stopped")

    app = FastAPI(
        title="Chainhook Monitor API",
        description="Receives Chainhook notifications for one contract and serves recent events and stats.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    install_middleware(app, settings)
    app.include_router(router)

    @app.exception_handler(StarletteHTTPException)
    def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Consistent JSON error response for HTTP errors (404, 405, ...)."""
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Last resort: anything a route did not handle still gets the JSON error shape."""
        logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
        return _error_response(500, "Internal server error")

    return app
