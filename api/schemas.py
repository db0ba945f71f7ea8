"""API-specific request and response models."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from models import ChatMessage, Hole, Round
from session import ConversationSession, SessionState, TurnOutcome, TurnState


class StartSessionRequest(BaseModel):
    course_id: str


class SendMessageRequest(BaseModel):
    text: str = Field(..., min_length=1)

    @field_validator('text')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Message cannot be blank")
        return v


class SessionResponse(BaseModel):
    """Snapshot of the active round session."""
    course_id: str
    course_name: str
    state: SessionState
    turn_state: TurnState
    hole_index: int
    current_hole: Hole
    round: Round

    @classmethod
    def from_session(cls, session: ConversationSession) -> "SessionResponse":
        return cls(
            course_id=session.course.id,
            course_name=session.course.name,
            state=session.state,
            turn_state=session.turn_state,
            hole_index=session.hole_index,
            current_hole=session.current_hole,
            round=session.round,
        )


class TurnResponse(BaseModel):
    outcome: TurnOutcome
    reply: Optional[ChatMessage] = None
    session: SessionResponse
