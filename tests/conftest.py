from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from models import Course, Hole, PlayerProfile, Round
from session import (
    AssistantResponse,
    ConversationSession,
    CueDispatcher,
    InMemoryCourseNotes,
    InMemoryPlayerProfileStore,
    InMemoryRoundStore,
    SessionSettings,
    VoiceIO,
)


# ================================================================
# Fakes
# ================================================================

class ScriptedAssistant:
    """Replays canned responses in order; None once the script runs out."""

    def __init__(self, *responses: Optional[AssistantResponse], events: Optional[list] = None):
        self.responses = list(responses)
        self.calls = []
        self.events = events

    async def get_response(self, course, hole, round_, profile):
        self.calls.append({"course": course, "hole": hole, "round": round_, "profile": profile})
        if self.events is not None:
            self.events.append("assistant")
        return self.responses.pop(0) if self.responses else None


class FakeSpeechInput:
    def __init__(self):
        self.listener = None
        self.started = 0
        self.stopped = 0

    def subscribe(self, listener):
        self.listener = listener

    def start(self):
        self.started += 1
        self.listener.on_listening_changed(True)

    def stop(self):
        self.stopped += 1
        self.listener.on_listening_changed(False)

    def say(self, transcript: str):
        self.listener.on_transcript(transcript)


class RecordingSpeechOutput:
    def __init__(self, events: Optional[list] = None):
        self.events = events if events is not None else []
        self.spoken: List[str] = []
        self.cancelled = 0

    def speak(self, text: str):
        self.spoken.append(text)
        self.events.append("speak")

    def cancel(self):
        self.cancelled += 1


class RecordingCuePlayback:
    def __init__(self, events: Optional[list] = None):
        self.events = events if events is not None else []
        self.played: List[str] = []

    def _play(self, name):
        self.played.append(name)
        self.events.append(f"cue:{name}")

    def start_round(self):
        self._play("start_round")

    def discovery_chime(self):
        self._play("discovery_chime")

    def update_ping(self):
        self._play("update_ping")

    def memory_tone(self):
        self._play("memory_tone")

    def achievement_sound(self):
        self._play("achievement_sound")

    def shot_logged(self):
        self._play("shot_logged")


class RecordingRoundStore(InMemoryRoundStore):
    def __init__(self, events: Optional[list] = None):
        super().__init__()
        self.events = events if events is not None else []
        self.saved: List[Round] = []

    async def save_round(self, course_id, round_):
        await super().save_round(course_id, round_)
        self.saved.append(round_)
        self.events.append("save")


class RecordingCourseNotes(InMemoryCourseNotes):
    def __init__(self, courses=(), events: Optional[list] = None):
        super().__init__(courses)
        self.events = events if events is not None else []

    async def add_note(self, course_id, hole_number, text):
        await super().add_note(course_id, hole_number, text)
        self.events.append("note")


class FixedClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


def reply(text="Nice one.", cue=None, **extracted) -> AssistantResponse:
    return AssistantResponse(text=text, cue=cue, extracted_data=extracted or None)


# ================================================================
# Fixtures
# ================================================================

@pytest.fixture
def course():
    return Course(
        id="3f9a3c1e-0000-4000-8000-000000000001",
        name="Pebble Creek",
        holes=(
            Hole(hole_number=1, par=4, yardage=380, description="Dogleg left"),
            Hole(hole_number=2, par=3, yardage=165),
            Hole(hole_number=3, par=5, yardage=520, notes=("Water short right",)),
        ),
    )


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 6, 1, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def empty_round(clock):
    return Round(date=clock(), conditions="Calm")


@pytest.fixture
def events():
    return []


@pytest.fixture
def speech_input():
    return FakeSpeechInput()


@pytest.fixture
def speech_output(events):
    return RecordingSpeechOutput(events)


@pytest.fixture
def playback(events):
    return RecordingCuePlayback(events)


@pytest.fixture
def round_store(events):
    return RecordingRoundStore(events)


@pytest.fixture
def course_notes(course, events):
    return RecordingCourseNotes([course], events)


@pytest.fixture
def profile_store():
    return InMemoryPlayerProfileStore(PlayerProfile(tendencies=("Slices under pressure",)))


@pytest.fixture
def start_session(course, clock, round_store, course_notes, profile_store,
                  speech_input, speech_output, playback):
    """Factory: start a session around a given assistant."""

    async def _start(assistant, *, settings: Optional[SessionSettings] = None):
        return await ConversationSession.start(
            course,
            assistant=assistant,
            round_store=round_store,
            course_notes=course_notes,
            profile_store=profile_store,
            voice=VoiceIO(speech_input, speech_output),
            cues=CueDispatcher(playback),
            settings=settings,
            clock=clock,
        )

    return _start
