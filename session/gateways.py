from pydantic import field_validator
from typing import Any, Dict, Optional, Protocol

from models import Course, Hole, PlayerProfile, Round
from models.base import BaseGolfModel


class AssistantResponse(BaseGolfModel):
    """One successful assistant round-trip."""
    text: str
    cue: Optional[str] = None
    extracted_data: Optional[Dict[str, Any]] = None

    @field_validator('extracted_data', mode='before')
    @classmethod
    def non_mapping_to_none(cls, v):
        return v if isinstance(v, dict) else None


class CaddieAssistant(Protocol):
    """The conversational assistant.

    Implementors must never raise: any failure (network, parse, timeout)
    is reported as None so the session can treat it as a recoverable miss.
    """

    async def get_response(
        self,
        course: Course,
        hole: Hole,
        round_: Round,
        profile: PlayerProfile,
    ) -> Optional[AssistantResponse]:
        ...


class RoundStore(Protocol):
    """Round persistence. Saving is an idempotent overwrite of the round snapshot."""

    async def save_round(self, course_id: str, round_: Round) -> None:
        ...


class CourseCatalog(Protocol):
    """Course lookup used to open a session."""

    async def get_course(self, course_id: str) -> Optional[Course]:
        ...


class CourseNotes(Protocol):
    """Per-hole notes the caddie learns about a course."""

    async def add_note(self, course_id: str, hole_number: int, text: str) -> None:
        ...


class PlayerProfileStore(Protocol):
    """What the caddie remembers about the player between rounds."""

    async def get_profile(self) -> PlayerProfile:
        ...

    async def add_tendency(self, text: str) -> None:
        ...
