"""Outbound Notifications — the closed set of events the engine publishes.

Invariants:
    - Every variant has a fixed event name and fixed fields
    - to_message() always yields {"type": <name>, "data": {...}} with JSON-safe values
    - Broadcast variants go to every connection; reply variants go to one connection

Design Decisions:
    - Frozen dataclasses + a union alias over free-form dicts: the transport boundary
      is a discriminated union, checked by the type checker at every publish site
"""

from dataclasses import asdict, dataclass, field
from typing import ClassVar, Union


@dataclass(frozen=True)
class _Event:
    name: ClassVar[str] = ""

    def to_message(self) -> dict:
        return {"type": self.name, "data": asdict(self)}


# ─── Broadcasts ──────────────────────────────────────────────────

@dataclass(frozen=True)
class NewQuestion(_Event):
    name: ClassVar[str] = "new-question"
    question_index: int
    question: str
    channel: str
    total_questions: int
    participants: list[dict] = field(default_factory=list)


@dataclass(frozen=True)
class EpochUpdate(_Event):
    name: ClassVar[str] = "epoch-update"
    epoch_count: int


@dataclass(frozen=True)
class ResponseCountUpdate(_Event):
    name: ClassVar[str] = "response-count-update"
    question_index: int
    response_count: int
    total_participants: int


@dataclass(frozen=True)
class ParticipantJoined(_Event):
    name: ClassVar[str] = "participant-joined"
    participant_count: int


@dataclass(frozen=True)
class ParticipantLeft(_Event):
    name: ClassVar[str] = "participant-left"
    participant_count: int


@dataclass(frozen=True)
class SessionComplete(_Event):
    name: ClassVar[str] = "session-complete"
    message: str
    total_questions: int
    epoch_count: int


@dataclass(frozen=True)
class SessionEnded(_Event):
    name: ClassVar[str] = "session-ended"
    message: str
    reason: str


@dataclass(frozen=True)
class SessionPaused(_Event):
    name: ClassVar[str] = "session-paused"
    paused: bool


@dataclass(frozen=True)
class IdentitySuppressed(_Event):
    name: ClassVar[str] = "identity-suppressed"
    node_count: int


# ─── Direct replies ──────────────────────────────────────────────

@dataclass(frozen=True)
class Joined(_Event):
    name: ClassVar[str] = "joined"
    participant_id: str
    participant_count: int


@dataclass(frozen=True)
class JoinError(_Event):
    name: ClassVar[str] = "join-error"
    reason: str
    message: str


@dataclass(frozen=True)
class ResponseSubmitted(_Event):
    name: ClassVar[str] = "response-submitted"
    question_index: int


@dataclass(frozen=True)
class InvalidFrame(_Event):
    name: ClassVar[str] = "invalid-frame"
    message: str


BroadcastEvent = Union[
    NewQuestion, EpochUpdate, ResponseCountUpdate, ParticipantJoined,
    ParticipantLeft, SessionComplete, SessionEnded, SessionPaused,
    IdentitySuppressed,
]
ReplyEvent = Union[Joined, JoinError, ResponseSubmitted, InvalidFrame]
