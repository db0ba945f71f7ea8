from datetime import datetime
from pydantic import Field, field_validator
from typing import Optional, Tuple

from .base import BaseGolfModel
from .chat import ChatMessage
from .hole_performance import HolePerformance


class Round(BaseGolfModel):
    """A round in progress (or finished) at one course.

    `hole_by_hole` is kept in first-touched order, not sorted by hole
    number, and holds at most one entry per hole. `total_score` is only
    authoritative once `finished_at` is set.
    """
    date: datetime
    conditions: str = ""
    hole_by_hole: Tuple[HolePerformance, ...] = ()
    total_score: int = 0
    conversation: Tuple[ChatMessage, ...] = ()
    finished_at: Optional[datetime] = None

    @field_validator('hole_by_hole')
    @classmethod
    def validate_unique_holes(cls, v):
        seen = set()
        for perf in v:
            if perf.hole_number in seen:
                raise ValueError(f"Duplicate performance entry for hole {perf.hole_number}")
            seen.add(perf.hole_number)
        return v

    @property
    def is_finished(self) -> bool:
        return self.finished_at is not None

    def get_hole_performance(self, hole_number: int) -> Optional[HolePerformance]:
        """Get the performance entry for a hole, if it has been touched."""
        for perf in self.hole_by_hole:
            if perf.hole_number == hole_number:
                return perf
        return None

    def with_hole_performance(self, performance: HolePerformance) -> "Round":
        """Replace the entry for the same hole in place, or append a new one."""
        entries = list(self.hole_by_hole)
        for i, perf in enumerate(entries):
            if perf.hole_number == performance.hole_number:
                entries[i] = performance
                break
        else:
            entries.append(performance)
        return self.evolve(hole_by_hole=tuple(entries))

    def with_message(self, message: ChatMessage) -> "Round":
        """Append a message to the conversation."""
        return self.evolve(conversation=self.conversation + (message,))

    def calculate_total_score(self) -> int:
        """Sum of hole scores recorded so far."""
        return sum(perf.score for perf in self.hole_by_hole)

    def get_total_putts(self) -> int:
        return sum(perf.putts for perf in self.hole_by_hole)

    def finish(self, finished_at: datetime) -> "Round":
        """Freeze the round: compute the authoritative total score."""
        return self.evolve(total_score=self.calculate_total_score(), finished_at=finished_at)
