"""Holds the one round session the API serves at a time."""

import logging
from typing import Optional

from models import Course
from session import (
    CaddieAssistant,
    ConversationSession,
    CourseCatalog,
    CourseNotes,
    PlayerProfileStore,
    RoundStore,
    SessionSettings,
    SessionState,
)

logger = logging.getLogger(__name__)


class SessionConflictError(Exception):
    """A round is already in progress."""


class NoActiveSessionError(Exception):
    """No round is in progress."""


class SessionManager:
    def __init__(
        self,
        *,
        courses: CourseCatalog,
        assistant: CaddieAssistant,
        round_store: RoundStore,
        course_notes: CourseNotes,
        profile_store: PlayerProfileStore,
        settings: Optional[SessionSettings] = None,
    ):
        self.courses = courses
        self._assistant = assistant
        self._round_store = round_store
        self._course_notes = course_notes
        self._profile_store = profile_store
        self._settings = settings or SessionSettings()
        self._active: Optional[ConversationSession] = None

    @property
    def active(self) -> Optional[ConversationSession]:
        return self._active

    def require_active(self) -> ConversationSession:
        if self._active is None:
            raise NoActiveSessionError("No round in progress")
        return self._active

    async def start(self, course: Course) -> ConversationSession:
        """Open a new session. Raises SessionConflictError while another round is active."""
        if self._active is not None:
            if self._active.state is SessionState.ACTIVE:
                raise SessionConflictError(f"A round at {self._active.course.name} is in progress")
            await self._active.aclose()
        self._active = await ConversationSession.start(
            course,
            assistant=self._assistant,
            round_store=self._round_store,
            course_notes=self._course_notes,
            profile_store=self._profile_store,
            settings=self._settings,
        )
        return self._active

    async def release(self) -> None:
        """Drop the current session (finished or abandoned), releasing its resources."""
        if self._active is None:
            return
        session, self._active = self._active, None
        if session.state is SessionState.ACTIVE:
            logger.info("Abandoning unfinished round at %s", session.course.name)
        await session.aclose()
