"""
FastAPI/ASGI application entrypoint.

Settings are read from the environment when the app is built, so use the
factory form:
    uvicorn chainhook_monitor.api_server.app:create_app --factory --host 0.0.0.0 --port 3001
"""

from chainhook_monitor.api_server.server import create_app

__all__ = ["create_app"]
