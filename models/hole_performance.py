from pydantic import Field
from typing import Tuple

from .base import BaseGolfModel
from .shot import Shot


class HolePerformance(BaseGolfModel):
    """A player's record on a single hole: reported shots, score and putts."""
    hole_number: int = Field(..., ge=1)
    shots: Tuple[Shot, ...] = ()
    score: int = Field(0, ge=0)
    putts: int = Field(0, ge=0)

    def with_shot(self, shot: Shot) -> "HolePerformance":
        """Append a shot. Existing shots keep their order."""
        return self.evolve(shots=self.shots + (shot,))

    def with_score(self, score: int) -> "HolePerformance":
        """Overwrite the score (last write wins)."""
        return self.evolve(score=score)

    def to_par(self, par: int) -> int:
        """Score relative to par (+2, -1, etc.)."""
        return self.score - par
