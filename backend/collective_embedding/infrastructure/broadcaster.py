"""WebSocket Broadcaster — fans engine events out to connected sockets.

Invariants:
    - One bounded asyncio.Queue per connection; publish/send_to only enqueue (never await)
    - Per-connection delivery order equals publication order
    - A connection whose queue overflows, or that fails to send, is dropped from the
      fan-out set; an overflowed socket is closed with 1008 by its writer

Design Decisions:
    - Queue + writer task per socket: the engine stays synchronous, and a slow client
      cannot block delivery to the others
    - Messages are the {"type", "data"} envelopes from core.events.to_message()
"""

import asyncio
import logging
import uuid

from fastapi import WebSocket, status

from collective_embedding.core.domain_types import ConnectionId
from collective_embedding.core.events import BroadcastEvent, ReplyEvent

logger = logging.getLogger(__name__)

DEFAULT_MAX_QUEUE_SIZE: int = 256


class ConnectionManager:
    """Tracks live sockets and satisfies core.protocols.EventPublisher."""

    def __init__(self, max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE) -> None:
        self.max_queue_size = max_queue_size
        self._queues: dict[ConnectionId, asyncio.Queue[dict]] = {}

    @property
    def connection_count(self) -> int:
        return len(self._queues)

    def register(self) -> ConnectionId:
        connection_id = ConnectionId(uuid.uuid4().hex)
        self._queues[connection_id] = asyncio.Queue(maxsize=self.max_queue_size)
        logger.info(
            f"Client connected. Total: {len(self._queues)}",
            extra={"connection_id": connection_id},
        )
        return connection_id

    def unregister(self, connection_id: ConnectionId) -> None:
        if self._queues.pop(connection_id, None) is not None:
            logger.info(
                f"Client disconnected. Total: {len(self._queues)}",
                extra={"connection_id": connection_id},
            )

    def _enqueue(self, connection_id: ConnectionId, message: dict) -> None:
        queue = self._queues.get(connection_id)
        if queue is None:
            return
        try:
            queue.put_nowait(message)
        except asyncio.QueueFull:
            logger.warning(
                f"Send queue full ({self.max_queue_size}), dropping client",
                extra={"connection_id": connection_id},
            )
            self.unregister(connection_id)

    # --- EventPublisher --------------------------------------------------------

    def publish(self, event: BroadcastEvent) -> None:
        message = event.to_message()
        for connection_id in list(self._queues):
            self._enqueue(connection_id, message)

    def send_to(self, connection_id: ConnectionId, event: ReplyEvent) -> None:
        if connection_id not in self._queues:
            logger.debug(
                f"Dropped {event.name} for closed connection",
                extra={"connection_id": connection_id},
            )
            return
        self._enqueue(connection_id, event.to_message())

    # --- Writer ----------------------------------------------------------------

    async def pump(self, connection_id: ConnectionId, websocket: WebSocket) -> None:
        """Drain a connection's queue to its socket until cancelled, closed, or dropped."""
        queue = self._queues.get(connection_id)
        if queue is None:
            return
        try:
            while connection_id in self._queues:
                message = await queue.get()
                if connection_id not in self._queues:
                    break
                await websocket.send_json(message)
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug(
                f"WebSocket send failed: {e}", extra={"connection_id": connection_id},
            )
            self.unregister(connection_id)
