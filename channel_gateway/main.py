"""Channel Gateway API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GatewayError → {"success": false, "error": ...}
    - CORS configured from settings (not hardcoded)
    - Session registry and bridge HTTP client created on startup, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Registry on app.state: injected into routes via Depends, swappable in tests
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from channel_gateway import __version__
from channel_gateway.api.error_handlers import register_error_handlers
from channel_gateway.api.routes import channels, health
from channel_gateway.config import get_settings
from channel_gateway.infrastructure.bridge_client import (
    build_bridge_registry, build_http_client,
)
from channel_gateway.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    http = build_http_client(settings)
    app.state.session_registry = build_bridge_registry(settings, http)
    logger.info("Channel Gateway API started")
    try:
        yield
    finally:
        await http.aclose()
        logger.info("Channel Gateway API shutting down")


app = FastAPI(
    title="Channel Gateway API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(channels.router)

register_error_handlers(app)
