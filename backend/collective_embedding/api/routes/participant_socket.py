"""Participant Socket — WebSocket endpoint for joins, responses, and live events.

Invariants:
    - One ConnectionManager queue + writer task per socket for its whole lifetime
    - Malformed or binary frames get an invalid-frame reply and never reach the engine
    - Disconnect always runs engine.leave(connection_id) and awaits the cancelled
      writer task; graph history is kept

Design Decisions:
    - The engine sends joined/join-error/response-submitted replies itself through
      the publisher, so replies and broadcasts share one ordered queue
"""

import asyncio
import contextlib
import logging

from fastapi import APIRouter, Depends, WebSocket
from pydantic import ValidationError

from collective_embedding.api.dependencies import get_connection_manager, get_engine
from collective_embedding.core.domain_types import ConnectionId, ParticipantId
from collective_embedding.core.events import InvalidFrame
from collective_embedding.core.session_engine import SessionEngine
from collective_embedding.infrastructure.broadcaster import ConnectionManager
from collective_embedding.schemas.socket import (
    JoinSessionFrame, SubmitResponseFrame, inbound_frame_adapter,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["participants"])


def handle_frame(
    raw: str,
    connection_id: ConnectionId,
    engine: SessionEngine,
    manager: ConnectionManager,
) -> dict | None:
    """Validate one inbound frame and apply it. Returns the engine outcome."""
    try:
        frame = inbound_frame_adapter.validate_json(raw)
    except ValidationError as e:
        manager.send_to(connection_id, InvalidFrame(
            message=f"Invalid frame: {e.error_count()} error(s)",
        ))
        return None

    match frame:
        case JoinSessionFrame(data=data):
            return engine.join(data.session_id, data.name, connection_id)
        case SubmitResponseFrame(data=data):
            participant = engine.participant_for_connection(connection_id)
            if participant is None:
                manager.send_to(connection_id, InvalidFrame(
                    message="Join the session before responding",
                ))
                return None
            target = (
                ParticipantId(data.target_participant_id)
                if data.target_participant_id else None
            )
            return engine.record_response(participant.id, data.question_index, target)
    return None


@router.websocket("/ws")
async def participant_socket(
    websocket: WebSocket,
    engine: SessionEngine = Depends(get_engine),
    manager: ConnectionManager = Depends(get_connection_manager),
):
    await websocket.accept()
    connection_id = manager.register()
    writer = asyncio.create_task(manager.pump(connection_id, websocket))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                logger.debug(
                    "Rejected non-text frame", extra={"connection_id": connection_id},
                )
                manager.send_to(connection_id, InvalidFrame(
                    message="Frames must be JSON text",
                ))
                continue
            handle_frame(raw, connection_id, engine, manager)
    finally:
        manager.unregister(connection_id)
        engine.leave(connection_id)
        writer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await writer
