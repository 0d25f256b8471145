"""Session State — the single owned aggregate a SessionEngine mutates.

Invariants:
    - question_index == NOT_STARTED (-1) until the first question is shown
    - ResponseTable holds at most one Response per (question index, participant)
    - reset() leaves no participants, responses, nodes, edges, or names behind
    - Epoch only grows while the session lives; reset() returns it to 0

Design Decisions:
    - Plain dataclasses, no IO: the engine owns timers and publication, this module
      owns only data and computed properties
    - ResponseTable makes creation-on-first-write explicit instead of nested dict defaults
"""

from dataclasses import dataclass, field
from datetime import datetime

from collective_embedding.core.anonymize import IdentityRegistry
from collective_embedding.core.domain_types import (
    Channel, ConnectionId, ParticipantId, SessionId, NOT_STARTED,
)
from collective_embedding.core.graph_store import GraphStore
from collective_embedding.core.questions import Question


@dataclass
class Participant:
    id: ParticipantId
    connection_id: ConnectionId
    joined_at: datetime


@dataclass(frozen=True)
class Response:
    """One participant's answer to one question. target is None for an abstention."""
    target: ParticipantId | None
    channel: Channel
    submitted_at: datetime


class ResponseTable:
    """question index -> participant id -> Response."""

    def __init__(self) -> None:
        self._by_question: dict[int, dict[ParticipantId, Response]] = {}

    def put(
        self, question_index: int, participant_id: ParticipantId, response: Response,
    ) -> Response | None:
        """Store response, returning the one it replaced (if any)."""
        answers = self._by_question.setdefault(question_index, {})
        previous = answers.get(participant_id)
        answers[participant_id] = response
        return previous

    def count(self, question_index: int) -> int:
        return len(self._by_question.get(question_index, {}))

    @property
    def total(self) -> int:
        return sum(len(answers) for answers in self._by_question.values())

    def clear(self) -> None:
        self._by_question.clear()


@dataclass
class Session:
    """Process-wide classroom session. One exists at a time per engine."""

    id: SessionId | None = None
    active: bool = False
    paused: bool = False
    completed: bool = False

    questions: list[Question] = field(default_factory=list)
    question_index: int = NOT_STARTED

    participants: dict[ParticipantId, Participant] = field(default_factory=dict)
    responses: ResponseTable = field(default_factory=ResponseTable)
    graph: GraphStore = field(default_factory=GraphStore)
    identity: IdentityRegistry = field(default_factory=IdentityRegistry)

    epoch: int = 0

    # --- Computed properties ---------------------------------------------------

    @property
    def participant_count(self) -> int:
        return len(self.participants)

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def started(self) -> bool:
        return self.question_index > NOT_STARTED

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.question_index < len(self.questions):
            return self.questions[self.question_index]
        return None

    @property
    def has_next_question(self) -> bool:
        return self.question_index < len(self.questions) - 1

    @property
    def current_response_count(self) -> int:
        return self.responses.count(self.question_index)

    @property
    def all_answered(self) -> bool:
        """Everyone present has answered the current question (and someone is present)."""
        return (
            self.participant_count > 0
            and self.current_response_count >= self.participant_count
        )

    @property
    def identity_suppressed(self) -> bool:
        return self.identity.suppressed

    def participant_for_connection(
        self, connection_id: ConnectionId,
    ) -> Participant | None:
        for participant in self.participants.values():
            if participant.connection_id == connection_id:
                return participant
        return None

    # --- Mutation methods --------------------------------------------------------

    def reset(self) -> None:
        """Return to the uninitialized state. Pure state mutation."""
        self.id = None
        self.active = False
        self.paused = False
        self.completed = False
        self.questions = []
        self.question_index = NOT_STARTED
        self.participants.clear()
        self.responses.clear()
        self.graph.clear()
        self.identity.reset()
        self.epoch = 0
