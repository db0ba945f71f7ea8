from enum import Enum
from pydantic import field_validator
from typing import Any, Optional

from .base import BaseGolfModel

UNKNOWN = "Unknown"

GOLF_CLUBS = (
    "Driver", "3-Wood", "5-Wood", "Hybrid",
    "3-Iron", "4-Iron", "5-Iron", "6-Iron", "7-Iron", "8-Iron", "9-Iron",
    "Pitching Wedge", "Gap Wedge", "Sand Wedge", "Lob Wedge", "Putter",
)

LIE_TYPES = ("Tee Box", "Fairway", "Rough", "Bunker", "Green", "Fringe")


class ShotOutcome(str, Enum):
    """Where a shot finished."""
    FAIRWAY = "Fairway"
    GREEN = "Green"
    ROUGH = "Rough"
    BUNKER = "Bunker"
    WATER = "Water"
    OB = "OB"
    IN_HOLE = "In Hole"
    PENALTY = "Penalty"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "ShotOutcome":
        """Case-insensitive lookup. Anything unrecognised is UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower()
            for outcome in cls:
                if outcome.value.lower() == wanted:
                    return outcome
        return cls.UNKNOWN


class Shot(BaseGolfModel):
    """A single reported shot. Shots are only ever appended to a hole."""
    club: str = UNKNOWN
    lie: str = UNKNOWN
    outcome: ShotOutcome = ShotOutcome.UNKNOWN
    notes: Optional[str] = None

    @field_validator('outcome', mode='before')
    @classmethod
    def parse_outcome(cls, v):
        return ShotOutcome.parse(v)
