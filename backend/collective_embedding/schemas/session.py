"""Session Schemas — admin request bodies and lifecycle responses.

Invariants:
    - SessionCreate.questions: None (use defaults) or 1-100 questions, text stripped
    - Question channel must be one of the four registered channels

Design Decisions:
    - field_validator for side-effect-free transforms (strip)
"""

from pydantic import BaseModel, Field, field_validator

from collective_embedding.core.domain_types import Channel


class QuestionIn(BaseModel):
    text: str = Field(min_length=1, max_length=500)
    channel: Channel

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("question text cannot be empty or whitespace")
        return v


class SessionCreate(BaseModel):
    """Session creation — optional custom question set."""
    questions: list[QuestionIn] | None = Field(None, min_length=1, max_length=100)


class SessionCreated(BaseModel):
    session_id: str
    join_url: str
    total_questions: int


class SessionStatus(BaseModel):
    """Status read; only `active` is present before the first session."""
    active: bool
    session_id: str | None = None
    paused: bool | None = None
    completed: bool | None = None
    participant_count: int | None = None
    current_question_index: int | None = None
    total_questions: int | None = None
    epoch_count: int | None = None
    identity_deleted: bool | None = None


class PauseResume(BaseModel):
    pause: bool
