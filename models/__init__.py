from .base import BaseGolfModel
from .chat import ChatMessage, Sender
from .course import Course
from .extraction import ExtractionPayload
from .hole import Hole
from .hole_performance import HolePerformance
from .player_profile import PlayerProfile
from .round import Round
from .shot import GOLF_CLUBS, LIE_TYPES, Shot, ShotOutcome

__all__ = [
    "BaseGolfModel",
    "ChatMessage",
    "Course",
    "ExtractionPayload",
    "GOLF_CLUBS",
    "Hole",
    "HolePerformance",
    "LIE_TYPES",
    "PlayerProfile",
    "Round",
    "Sender",
    "Shot",
    "ShotOutcome",
]
