"""In-memory gateways for local runs and tests.

They satisfy the protocols in `session.gateways` without any backing
storage; everything lives for the lifetime of the process.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from models import Course, PlayerProfile, Round


class InMemoryRoundStore:
    """Keeps every round snapshot, keyed by course and round start time."""

    def __init__(self):
        self._history: Dict[str, Dict[datetime, Round]] = {}
        self.save_count = 0

    async def save_round(self, course_id: str, round_: Round) -> None:
        # Same round (same start time) overwrites its previous snapshot.
        self._history.setdefault(course_id, {})[round_.date] = round_
        self.save_count += 1

    def get_round_history(self, course_id: str) -> List[Round]:
        """Rounds for a course in the order they were first saved."""
        return list(self._history.get(course_id, {}).values())


class InMemoryCourseNotes:
    """Course catalog whose notes are applied directly to the held Course values."""

    def __init__(self, courses: Iterable[Course] = ()):
        self._courses: Dict[str, Course] = {c.id: c for c in courses}
        self.notes: List[Tuple[str, int, str]] = []

    async def get_course(self, course_id: str) -> Optional[Course]:
        return self._courses.get(course_id)

    async def add_note(self, course_id: str, hole_number: int, text: str) -> None:
        self.notes.append((course_id, hole_number, text))
        course = self._courses.get(course_id)
        if course is None:
            return
        hole = course.get_hole(hole_number)
        if hole is None:
            return
        holes = list(course.holes)
        holes[hole_number - 1] = hole.with_note(text)
        self._courses[course_id] = course.evolve(holes=tuple(holes))


class InMemoryPlayerProfileStore:
    def __init__(self, profile: Optional[PlayerProfile] = None):
        self._profile = profile or PlayerProfile()

    async def get_profile(self) -> PlayerProfile:
        return self._profile

    async def add_tendency(self, text: str) -> None:
        self._profile = self._profile.with_tendency(text)
