"""The round session: one course, one round, one conversation.

Each user turn is a single assistant round-trip. While it is in flight the
session is AWAITING_RESPONSE and rejects further messages. A successful
turn always runs its side effects in the same order:

    speak -> cue -> merge -> append assistant message -> persist

so the learning annotation on the assistant message describes the merge of
that very turn.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Optional, Tuple

from models import ChatMessage, Course, ExtractionPayload, Hole, PlayerProfile, Round
from session.config import SessionSettings
from session.cues import Cue, CueDispatcher
from session.exceptions import SessionFinishedError
from session.gateways import (
    AssistantResponse,
    CaddieAssistant,
    CourseNotes,
    PlayerProfileStore,
    RoundStore,
)
from session.hole_registry import HoleRegistry
from session.merger import MergeResult, compose_learning, merge_extraction
from session.persistence import RoundWriter
from session.voice import VoiceIO

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"


class TurnState(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


class TurnOutcome(str, Enum):
    """What happened to one call of `send_user_message`."""
    COMPLETED = "completed"    # assistant answered, round merged and saved
    IGNORED = "ignored"        # blank text, or a turn already in flight
    FAILED = "failed"          # assistant gave no response
    TIMED_OUT = "timed_out"    # assistant exceeded the bounded wait; retryable
    DISCARDED = "discarded"    # round finished while the assistant was answering


class _TurnDiscarded(Exception):
    """The round finished while a turn's learning writes were pending."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def greeting_for(course: Course, first_hole: Hole) -> str:
    return (
        f"Hey! Back at {course.name} again? How are you feeling about your game today? "
        f"We're starting on Hole {first_hole.hole_number}."
    )


class ConversationSession:
    """Owns the round and hole pointer; everything else is injected.

    Use `ConversationSession.start(...)` to create one. The session is an
    async context manager: leaving the block releases voice I/O and waits
    for pending round writes, whether or not the round was finished.
    """

    def __init__(
        self,
        course: Course,
        round_: Round,
        profile: PlayerProfile,
        *,
        assistant: CaddieAssistant,
        round_store: RoundStore,
        course_notes: CourseNotes,
        profile_store: PlayerProfileStore,
        voice: Optional[VoiceIO] = None,
        cues: Optional[CueDispatcher] = None,
        settings: Optional[SessionSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._course = course
        self._registry = HoleRegistry.from_course(course)
        self._round = round_
        self._profile = profile
        self._hole_index = 0
        self._assistant = assistant
        self._course_notes = course_notes
        self._profile_store = profile_store
        self._settings = settings or SessionSettings()
        self._voice = voice or VoiceIO(speech_enabled=self._settings.speech_enabled)
        self._cues = cues or CueDispatcher()
        self._clock = clock or _utcnow
        self._writer = RoundWriter(round_store, course.id)
        self._state = SessionState.ACTIVE
        self._turn_state = TurnState.IDLE
        self._learning_write: Optional[asyncio.Future] = None

    @classmethod
    async def start(
        cls,
        course: Course,
        *,
        assistant: CaddieAssistant,
        round_store: RoundStore,
        course_notes: CourseNotes,
        profile_store: PlayerProfileStore,
        voice: Optional[VoiceIO] = None,
        cues: Optional[CueDispatcher] = None,
        settings: Optional[SessionSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> "ConversationSession":
        """Begin a round at `course` with a single greeting from the caddie.

        Raises EmptyCourseError if the course has no holes.
        """
        settings = settings or SessionSettings()
        clock = clock or _utcnow
        first_hole = HoleRegistry.from_course(course).first
        profile = await profile_store.get_profile()

        now = clock()
        round_ = Round(
            date=now,
            conditions=settings.default_conditions,
            conversation=(ChatMessage.from_assistant(greeting_for(course, first_hole), now),),
        )
        session = cls(
            course,
            round_,
            profile,
            assistant=assistant,
            round_store=round_store,
            course_notes=course_notes,
            profile_store=profile_store,
            voice=voice,
            cues=cues,
            settings=settings,
            clock=clock,
        )
        session._cues.start_round()
        logger.info("Started round at %s (%d holes)", course.name, course.hole_count)
        return session

    # ================================================================
    # State
    # ================================================================

    @property
    def course(self) -> Course:
        return self._course

    @property
    def round(self) -> Round:
        return self._round

    @property
    def profile(self) -> PlayerProfile:
        return self._profile

    @property
    def hole_index(self) -> int:
        return self._hole_index

    @property
    def current_hole(self) -> Hole:
        return self._registry.hole_at(self._hole_index)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def turn_state(self) -> TurnState:
        return self._turn_state

    @property
    def voice(self) -> VoiceIO:
        return self._voice

    @property
    def writer(self) -> RoundWriter:
        return self._writer

    def _ensure_active(self) -> None:
        if self._state is SessionState.FINISHED:
            raise SessionFinishedError("Round is already finished")

    # ================================================================
    # Turns
    # ================================================================

    async def send_user_message(self, text: Optional[str] = None) -> TurnOutcome:
        """Run one conversational turn.

        With no `text`, the current voice transcript is sent. Listening is
        always stopped before anything is sent.
        """
        self._ensure_active()
        if self._turn_state is TurnState.AWAITING_RESPONSE:
            logger.debug("Turn already in flight; ignoring message")
            return TurnOutcome.IGNORED
        if self._voice.is_listening:
            self._voice.stop_listening()
        if text is None:
            text = self._voice.take_input()
        if not text or not text.strip():
            return TurnOutcome.IGNORED

        self._round = self._round.with_message(ChatMessage.from_user(text, self._clock()))
        self._turn_state = TurnState.AWAITING_RESPONSE
        try:
            hole = self.current_hole
            try:
                response = await self._request_response(hole)
            except asyncio.TimeoutError:
                logger.warning(
                    "Assistant did not answer within %ss; turn can be retried",
                    self._settings.assistant_timeout_seconds,
                )
                return TurnOutcome.TIMED_OUT

            if response is None:
                return TurnOutcome.FAILED
            if not await self._apply_response(response):
                logger.info("Discarding assistant response for a finished round")
                return TurnOutcome.DISCARDED
            return TurnOutcome.COMPLETED
        finally:
            self._turn_state = TurnState.IDLE

    async def _request_response(self, hole: Hole) -> Optional[AssistantResponse]:
        call = self._assistant.get_response(self._course, hole, self._round, self._profile)
        try:
            return await asyncio.wait_for(call, timeout=self._settings.assistant_timeout_seconds)
        except asyncio.TimeoutError:
            raise
        except Exception:
            logger.exception("Assistant raised instead of returning None")
            return None

    async def _apply_response(self, response: AssistantResponse) -> bool:
        """Run the turn's side effects. False if the round was finished meanwhile."""
        if self._state is SessionState.FINISHED:
            return False
        self._voice.speak(response.text)
        self._cues.dispatch(response.cue)

        payload = ExtractionPayload.from_raw(response.extracted_data)
        result = merge_extraction(
            self._round,
            self._registry,
            self._hole_index,
            payload,
            assistant_name=self._settings.assistant_name,
        )
        try:
            learning, profile = await self._record_learnings(result)
        except _TurnDiscarded:
            return False
        if self._state is SessionState.FINISHED:
            return False
        self._round = result.round
        self._hole_index = result.hole_index
        self._profile = profile

        self._round = self._round.with_message(
            ChatMessage.from_assistant(response.text, self._clock(), learning=learning)
        )
        self._writer.submit(self._round)
        return True

    async def _record_learnings(self, result: MergeResult) -> Tuple[Optional[str], PlayerProfile]:
        """Run the note/tendency gateways.

        Returns the learning annotation (listing only what succeeded) and the
        profile to adopt if the turn commits. Raises _TurnDiscarded once the
        round is finished; no further gateway is called after that.
        """
        profile = self._profile
        if result.course_note is None and result.player_tendency is None:
            return result.learning, profile

        note_hole = None
        if result.course_note is not None:
            note = result.course_note
            saved = await self._run_learning_write(
                lambda: self._course_notes.add_note(self._course.id, note.hole_number, note.text),
                f"course note for hole {note.hole_number}",
            )
            if saved:
                note_hole = note.hole_number

        tendency_recorded = False
        if result.player_tendency is not None:
            tendency = result.player_tendency
            tendency_recorded = await self._run_learning_write(
                lambda: self._profile_store.add_tendency(tendency),
                "player tendency",
            )
            if tendency_recorded:
                profile = profile.with_tendency(tendency)

        learning = compose_learning(note_hole, tendency_recorded, self._settings.assistant_name)
        return learning, profile

    async def _run_learning_write(self, call: Callable[[], Awaitable[None]], what: str) -> bool:
        """Run one gateway write that `finish()` can cancel. False if it failed."""
        if self._state is SessionState.FINISHED:
            raise _TurnDiscarded()
        self._learning_write = asyncio.ensure_future(call())
        try:
            await self._learning_write
        except asyncio.CancelledError:
            if self._state is SessionState.FINISHED:
                raise _TurnDiscarded()
            raise
        except Exception:
            logger.exception("Saving %s failed", what)
            return False
        finally:
            self._learning_write = None
        return True

    # ================================================================
    # Voice controls
    # ================================================================

    def toggle_listening(self) -> None:
        """Start or stop the microphone. Does nothing while a turn is in flight."""
        if self._turn_state is TurnState.AWAITING_RESPONSE or self._state is SessionState.FINISHED:
            return
        self._voice.toggle_listening()

    def toggle_speech(self) -> bool:
        return self._voice.toggle_speech()

    # ================================================================
    # Finish / release
    # ================================================================

    async def finish(self) -> Round:
        """Freeze the round, save it and celebrate. The session is then terminal."""
        self._ensure_active()
        if self._learning_write is not None:
            self._learning_write.cancel()
        self._voice.cancel_speech()
        self._round = self._round.finish(self._clock())
        self._writer.submit(self._round)
        self._cues.dispatch(Cue.ACHIEVEMENT)
        self._state = SessionState.FINISHED
        self._voice.close()
        logger.info(
            "Finished round at %s: total %d over %d holes",
            self._course.name, self._round.total_score, len(self._round.hole_by_hole),
        )
        return self._round

    async def aclose(self) -> None:
        """Release voice I/O and wait for pending writes. Safe to call more than once."""
        self._voice.close()
        await self._writer.drain()

    async def __aenter__(self) -> "ConversationSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
