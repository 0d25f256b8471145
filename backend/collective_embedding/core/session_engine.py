"""Session Engine — the state machine that drives a live classroom session.

Invariants:
    - The engine is the only component that mutates Session (and its GraphStore)
    - Every operation runs to completion synchronously and returns an outcome dict:
      status "ok" | "rejected" (validation) | "refused" (precondition) | "noop";
      refusals never raise and never change state
    - At most one auto-advance timer is pending; scheduling always cancels first
    - A timer carries (session id, question index); a firing that no longer matches
      the live session is discarded
    - Starting (cursor -1 -> 0) does not count as an epoch; every later advance does

Design Decisions:
    - Publisher and scheduler injected as Protocols: tests drive time by hand, the
      shell wires asyncio call_later and WebSocket fan-out
    - Resubmission overwrites: the previous target's weight is retracted before the new
      one is applied, so a corrected answer never double-counts
    - Manual advance cancels any pending auto-advance for the question it leaves
"""

import logging
import random
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from collective_embedding.core import graph_view
from collective_embedding.core.domain_types import (
    ConnectionId, ParticipantId, SessionId, SessionPhase,
    DEFAULT_AUTO_ADVANCE_DELAY_SECONDS, DEFAULT_MAX_PARTICIPANTS,
)
from collective_embedding.core.events import (
    EpochUpdate, IdentitySuppressed, JoinError, Joined, NewQuestion,
    ParticipantJoined, ParticipantLeft, ResponseCountUpdate, ResponseSubmitted,
    SessionComplete, SessionEnded, SessionPaused,
)
from collective_embedding.core.protocols import (
    CancellableTimer, EventPublisher, Scheduler,
)
from collective_embedding.core.questions import (
    DEFAULT_QUESTIONS, Question, shuffle_questions,
)
from collective_embedding.core.session_state import Participant, Response, Session

logger = logging.getLogger(__name__)

TimerKey = tuple[SessionId, int]


# ─── Outcome builders ────────────────────────────────────────────

def _ok(**data) -> dict:
    return {"status": "ok", **data}


def _rejected(code: str, message: str, **data) -> dict:
    logger.info(f"Rejected: {message}", extra={"error_code": code})
    return {"status": "rejected", "error_code": code, "message": message, **data}


def _refused(code: str, message: str, **data) -> dict:
    return {"status": "refused", "error_code": code, "message": message, **data}


def _noop(code: str, message: str) -> dict:
    return {"status": "noop", "error_code": code, "message": message}


_NO_ACTIVE_SESSION = ("NO_ACTIVE_SESSION", "No active session")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionEngine:
    """Owns one Session and every transition it can make."""

    def __init__(
        self,
        publisher: EventPublisher,
        scheduler: Scheduler,
        *,
        max_participants: int = DEFAULT_MAX_PARTICIPANTS,
        auto_advance_delay: float = DEFAULT_AUTO_ADVANCE_DELAY_SECONDS,
        rng: random.Random | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.session = Session()
        self.max_participants = max_participants
        self.auto_advance_delay = auto_advance_delay
        self._publisher = publisher
        self._scheduler = scheduler
        self._rng = rng or random.Random()
        self._new_id = id_factory or (lambda: str(uuid.uuid4()))
        self._now = clock or _utcnow
        self._timer: CancellableTimer | None = None
        self._timer_key: TimerKey | None = None

    # --- Observed state ----------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        if not self.session.active:
            return SessionPhase.UNINITIALIZED
        return SessionPhase.PAUSED if self.session.paused else SessionPhase.ACTIVE

    @property
    def auto_advance_pending(self) -> bool:
        return self._timer is not None

    def participant_for_connection(
        self, connection_id: ConnectionId,
    ) -> Participant | None:
        return self.session.participant_for_connection(connection_id)

    # --- Lifecycle -----------------------------------------------------------------

    def create_session(self, questions: Sequence[Question] | None = None) -> dict:
        """Discard any prior session and open a fresh one with shuffled questions."""
        s = self.session
        self._cancel_auto_advance()
        if s.active:
            self._publisher.publish(SessionEnded(
                message="Session replaced by a new session", reason="superseded",
            ))
        s.reset()
        s.id = SessionId(self._new_id())
        s.active = True
        s.questions = shuffle_questions(questions or DEFAULT_QUESTIONS, self._rng)
        logger.info(
            f"Session created with {s.total_questions} question(s)",
            extra={"session_id": s.id},
        )
        return _ok(session_id=s.id, total_questions=s.total_questions)

    def end_session(self) -> dict:
        s = self.session
        if not s.active:
            return _noop("NO_ACTIVE_SESSION", "No active session to end")
        self._cancel_auto_advance()
        self._publisher.publish(SessionEnded(
            message="Session ended by administrator", reason="admin_terminated",
        ))
        logger.info("Session ended", extra={"session_id": s.id, "epoch": s.epoch})
        s.reset()
        return _ok(message="Session ended successfully")

    # --- Roster --------------------------------------------------------------------

    def join(
        self, session_id: str | None, name: str, connection_id: ConnectionId,
    ) -> dict:
        s = self.session
        if not s.active:
            return self._reject_join(connection_id, *_NO_ACTIVE_SESSION)
        if session_id != s.id:
            return self._reject_join(connection_id, "INVALID_SESSION", "Invalid session")
        existing = s.participant_for_connection(connection_id)
        if existing is not None:
            self._publisher.send_to(
                connection_id, Joined(existing.id, s.participant_count),
            )
            return _ok(participant_id=existing.id, participant_count=s.participant_count)
        if s.participant_count >= self.max_participants:
            return self._reject_join(connection_id, "SESSION_FULL", "Session is full")

        participant_id = ParticipantId(self._new_id())
        s.participants[participant_id] = Participant(
            id=participant_id, connection_id=connection_id, joined_at=self._now(),
        )
        s.graph.add_node(participant_id)
        s.identity.record(participant_id, name)

        self._publisher.send_to(
            connection_id, Joined(participant_id, s.participant_count),
        )
        self._publisher.publish(ParticipantJoined(s.participant_count))
        logger.info(
            "Participant joined",
            extra={"session_id": s.id, "participant_id": participant_id},
        )
        return _ok(participant_id=participant_id, participant_count=s.participant_count)

    def _reject_join(self, connection_id: ConnectionId, code: str, message: str) -> dict:
        self._publisher.send_to(connection_id, JoinError(reason=code, message=message))
        return _rejected(code, message)

    def leave(self, connection_id: ConnectionId) -> dict:
        """Drop the participant bound to connection_id. Graph history is kept."""
        s = self.session
        participant = s.participant_for_connection(connection_id)
        if participant is None:
            return _noop("NOT_A_PARTICIPANT", "Connection has no participant")
        del s.participants[participant.id]
        self._publisher.publish(ParticipantLeft(s.participant_count))
        logger.info(
            "Participant left",
            extra={"session_id": s.id, "participant_id": participant.id},
        )
        return _ok(participant_id=participant.id, participant_count=s.participant_count)

    # --- Responses -----------------------------------------------------------------

    def record_response(
        self,
        participant_id: ParticipantId,
        question_index: int,
        target_id: ParticipantId | None,
    ) -> dict:
        """Record one answer for the current question and grow the graph."""
        s = self.session
        if not s.active:
            return _rejected(*_NO_ACTIVE_SESSION)
        participant = s.participants.get(participant_id)
        if participant is None:
            return _rejected("NOT_A_PARTICIPANT", "Unknown or departed participant")
        question = s.current_question
        if question is None or s.completed or question_index != s.question_index:
            return _rejected(
                "STALE_QUESTION",
                f"Question {question_index} is not the current question",
                current_question_index=s.question_index,
            )
        if target_id == participant_id:
            return _rejected("SELF_NOMINATION", "Participants cannot nominate themselves")
        if target_id is not None and not s.graph.has_node(target_id):
            return _rejected("UNKNOWN_TARGET", f"Unknown target '{target_id}'")

        now = self._now()
        previous = s.responses.put(
            question_index, participant_id, Response(target_id, question.channel, now),
        )
        if previous is not None and previous.target is not None:
            s.graph.retract_edge(participant_id, previous.target, previous.channel, now)
        if target_id is not None:
            s.graph.upsert_edge(participant_id, target_id, question.channel, now)

        response_count = s.responses.count(question_index)
        self._publisher.send_to(participant.connection_id, ResponseSubmitted(question_index))
        self._publisher.publish(ResponseCountUpdate(
            question_index=question_index,
            response_count=response_count,
            total_participants=s.participant_count,
        ))
        self._check_auto_advance()
        return _ok(
            question_index=question_index,
            response_count=response_count,
            participant_count=s.participant_count,
            replaced=previous is not None,
        )

    # --- Question flow -------------------------------------------------------------

    def start_questions(self) -> dict:
        s = self.session
        if not s.active:
            return _noop(*_NO_ACTIVE_SESSION)
        if s.started:
            return _refused("QUESTIONS_ALREADY_STARTED", "Questions already started")
        if s.paused:
            return _noop("SESSION_PAUSED", "Session is paused")
        return self._advance()

    def advance_question(self) -> dict:
        """Move to the next question once everyone present has answered."""
        s = self.session
        if not s.active:
            return _noop(*_NO_ACTIVE_SESSION)
        if s.paused:
            return _noop("SESSION_PAUSED", "Session is paused")
        if s.completed:
            return _noop("NO_MORE_QUESTIONS", "No more questions")
        if s.started and s.participant_count > 0 and not s.all_answered:
            return _refused(
                "WAITING_FOR_RESPONSES",
                (
                    "Waiting for all participants to answer. "
                    f"{s.current_response_count}/{s.participant_count} have responded."
                ),
                response_count=s.current_response_count,
                participant_count=s.participant_count,
            )
        return self._advance()

    def _advance(self) -> dict:
        s = self.session
        self._cancel_auto_advance()
        if not s.has_next_question:
            s.completed = True
            self._publisher.publish(SessionComplete(
                message="All questions completed",
                total_questions=s.total_questions,
                epoch_count=s.epoch,
            ))
            logger.info("All questions completed", extra={"session_id": s.id})
            return _ok(completed=True, question_index=s.question_index, epoch_count=s.epoch)

        finished_round = s.started
        s.question_index += 1
        question = s.questions[s.question_index]
        self._publisher.publish(NewQuestion(
            question_index=s.question_index,
            question=question.text,
            channel=question.channel.value,
            total_questions=s.total_questions,
            participants=self._roster(),
        ))
        if finished_round:
            self.increment_epoch()
        logger.info(
            f"Advanced to question {s.question_index + 1}/{s.total_questions}",
            extra={"session_id": s.id, "question_index": s.question_index},
        )
        return _ok(
            completed=False,
            question_index=s.question_index,
            question=question.text,
            channel=question.channel.value,
            epoch_count=s.epoch,
        )

    def _roster(self) -> list[dict]:
        s = self.session
        return [
            {"id": pid, "name": s.identity.display_name(pid, s.graph)}
            for pid in s.participants
        ]

    def increment_epoch(self) -> dict:
        s = self.session
        if not s.active:
            return _noop(*_NO_ACTIVE_SESSION)
        s.epoch += 1
        self._publisher.publish(EpochUpdate(s.epoch))
        return _ok(epoch_count=s.epoch)

    # --- Pause / resume ------------------------------------------------------------

    def pause(self) -> dict:
        s = self.session
        if not s.active:
            return _noop(*_NO_ACTIVE_SESSION)
        s.paused = True
        self._cancel_auto_advance()
        self._publisher.publish(SessionPaused(paused=True))
        return _ok(paused=True)

    def resume(self) -> dict:
        s = self.session
        if not s.active:
            return _noop(*_NO_ACTIVE_SESSION)
        if not s.paused:
            return _noop("NOT_PAUSED", "Session is not paused")
        s.paused = False
        self._publisher.publish(SessionPaused(paused=False))
        self._check_auto_advance()
        return _ok(paused=False)

    def set_paused(self, pause: bool) -> dict:
        return self.pause() if pause else self.resume()

    # --- Auto-advance --------------------------------------------------------------

    def _check_auto_advance(self) -> None:
        s = self.session
        if s.active and not s.paused and s.started and not s.completed and s.all_answered:
            self._schedule_auto_advance()

    def _schedule_auto_advance(self) -> None:
        self._cancel_auto_advance()
        key: TimerKey = (self.session.id, self.session.question_index)
        self._timer_key = key
        self._timer = self._scheduler.call_later(
            self.auto_advance_delay, lambda: self._on_auto_advance(key),
        )

    def _cancel_auto_advance(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._timer_key = None

    def _on_auto_advance(self, key: TimerKey) -> None:
        s = self.session
        if key != self._timer_key:
            logger.warning(
                "Discarded superseded auto-advance",
                extra={"session_id": key[0], "question_index": key[1]},
            )
            return
        self._timer = None
        self._timer_key = None
        if not s.active or key != (s.id, s.question_index) or s.paused:
            logger.warning(
                "Discarded stale auto-advance",
                extra={"session_id": key[0], "question_index": key[1]},
            )
            return
        self._advance()

    # --- Identity ------------------------------------------------------------------

    def suppress_identity(self) -> dict:
        """Discard every real name for the rest of this session. One-way."""
        s = self.session
        if not s.active:
            return _noop(*_NO_ACTIVE_SESSION)
        if not s.identity.suppress():
            return _noop("ALREADY_SUPPRESSED", "Identities already deleted")
        self._publisher.publish(IdentitySuppressed(node_count=s.graph.node_count))
        return _ok(identity_deleted=True)

    # --- Reads ---------------------------------------------------------------------

    def status(self) -> dict:
        return graph_view.session_status(self.session)

    def graph_snapshot(self) -> dict:
        return graph_view.graph_snapshot(self.session)

    def node_profile(self, node_id: str) -> dict:
        return graph_view.node_profile(self.session, ParticipantId(node_id))
