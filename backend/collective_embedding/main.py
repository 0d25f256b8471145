"""Collective Embedding API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Exactly one SessionEngine per process, created in the lifespan and kept on app.state
    - All session state is volatile: a restart starts from an uninitialized engine
    - CORS configured from settings (not hardcoded)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Engine wired to ConnectionManager (publisher) and AsyncioScheduler (timers):
      the core stays synchronous and IO-free
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from collective_embedding.api.error_handlers import register_error_handlers
from collective_embedding.api.routes import (
    health, participant_socket, session_admin, session_graph,
)
from collective_embedding.config import get_settings
from collective_embedding.core.session_engine import SessionEngine
from collective_embedding.infrastructure.broadcaster import ConnectionManager
from collective_embedding.infrastructure.observability import setup_logging
from collective_embedding.infrastructure.scheduler import AsyncioScheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    connections = ConnectionManager(max_queue_size=settings.send_queue_size)
    app.state.connections = connections
    app.state.engine = SessionEngine(
        connections,
        AsyncioScheduler(),
        max_participants=settings.max_participants,
        auto_advance_delay=settings.auto_advance_delay_seconds,
    )
    logger.info("Collective Embedding API started")
    yield
    app.state.engine.end_session()
    logger.info("Collective Embedding API shutting down")


app = FastAPI(
    title="Collective Embedding API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(session_admin.router)
app.include_router(session_graph.router)
app.include_router(participant_socket.router)

register_error_handlers(app)

# Mounted AFTER API routes so /api/* and /ws take precedence
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
