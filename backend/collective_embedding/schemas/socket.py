"""Socket Frame Schemas — inbound participant messages over the WebSocket.

Invariants:
    - Every frame is {"type": ..., "data": {...}}; type selects the data model
    - Unknown types and malformed data fail validation before reaching the engine

Design Decisions:
    - Discriminated union + TypeAdapter: one parse call yields the right frame class
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


class JoinSessionData(BaseModel):
    session_id: str
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SubmitResponseData(BaseModel):
    question_index: int = Field(ge=0)
    target_participant_id: str | None = None


class JoinSessionFrame(BaseModel):
    type: Literal["join-session"]
    data: JoinSessionData


class SubmitResponseFrame(BaseModel):
    type: Literal["submit-response"]
    data: SubmitResponseData


InboundFrame = Annotated[
    Union[JoinSessionFrame, SubmitResponseFrame], Field(discriminator="type"),
]
inbound_frame_adapter: TypeAdapter[InboundFrame] = TypeAdapter(InboundFrame)
