from .config import SessionSettings
from .conversation import ConversationSession, SessionState, TurnOutcome, TurnState
from .cues import Cue, CueDispatcher, CuePlayback, NullCuePlayback
from .exceptions import EmptyCourseError, HolePointerError, SessionError, SessionFinishedError
from .gateways import (
    AssistantResponse,
    CaddieAssistant,
    CourseCatalog,
    CourseNotes,
    PlayerProfileStore,
    RoundStore,
)
from .hole_registry import HoleRegistry
from .memory import InMemoryCourseNotes, InMemoryPlayerProfileStore, InMemoryRoundStore
from .merger import CourseNoteRequest, MergeResult, compose_learning, merge_extraction
from .persistence import RoundWriter
from .voice import SpeechInput, SpeechInputListener, SpeechOutput, VoiceIO

__all__ = [
    "AssistantResponse",
    "CaddieAssistant",
    "ConversationSession",
    "CourseCatalog",
    "CourseNoteRequest",
    "CourseNotes",
    "Cue",
    "CueDispatcher",
    "CuePlayback",
    "EmptyCourseError",
    "HolePointerError",
    "HoleRegistry",
    "InMemoryCourseNotes",
    "InMemoryPlayerProfileStore",
    "InMemoryRoundStore",
    "MergeResult",
    "NullCuePlayback",
    "PlayerProfileStore",
    "RoundStore",
    "RoundWriter",
    "SessionError",
    "SessionFinishedError",
    "SessionSettings",
    "SessionState",
    "SpeechInput",
    "SpeechInputListener",
    "SpeechOutput",
    "TurnOutcome",
    "TurnState",
    "VoiceIO",
    "compose_learning",
    "merge_extraction",
]
