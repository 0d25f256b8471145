"""Dependencies — app-scoped singletons exposed to routes.

Invariants:
    - The engine and connection manager are created once in the lifespan and live
      on app.state; routes never construct them

Design Decisions:
    - HTTPConnection parameter: the same dependency serves HTTP routes and the WebSocket
    - Tests override get_engine via app.dependency_overrides
"""

from fastapi import HTTPException, status
from starlette.requests import HTTPConnection

from collective_embedding.core.session_engine import SessionEngine
from collective_embedding.infrastructure.broadcaster import ConnectionManager


def get_engine(connection: HTTPConnection) -> SessionEngine:
    engine = getattr(connection.app.state, "engine", None)
    if engine is None:
        raise HTTPException(
            status.HTTP_503_SERVICE_UNAVAILABLE, detail="Session engine not initialized",
        )
    return engine


def get_connection_manager(connection: HTTPConnection) -> ConnectionManager:
    manager = getattr(connection.app.state, "connections", None)
    if manager is None:
        raise HTTPException(
            status.HTTP_503_SERVICE_UNAVAILABLE, detail="Connection manager not initialized",
        )
    return manager
