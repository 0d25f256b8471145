"""Boundary Protocols — contracts between the session engine and its shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Publication and timers are reached only through these Protocol types
    - Implementations provided by shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, asyncio's TimerHandle satisfies
      CancellableTimer without a wrapper class
    - Synchronous methods: engine handlers run to completion; the shell decides how
      queued messages reach sockets
"""

from collections.abc import Callable
from typing import Protocol

from collective_embedding.core.domain_types import ConnectionId
from collective_embedding.core.events import BroadcastEvent, ReplyEvent


class EventPublisher(Protocol):
    """Contract for the real-time transport — implemented by shell."""
    def publish(self, event: BroadcastEvent) -> None: ...
    def send_to(self, connection_id: ConnectionId, event: ReplyEvent) -> None: ...


class CancellableTimer(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Contract for one-shot deferred callbacks — implemented by shell."""
    def call_later(
        self, delay: float, callback: Callable[[], None],
    ) -> CancellableTimer: ...
