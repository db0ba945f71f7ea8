from typing import Optional, Tuple

from models import Course, Hole
from session.exceptions import EmptyCourseError, HolePointerError


class HoleRegistry:
    """Ordered, immutable view of a course's holes for the length of a round."""

    def __init__(self, holes: Tuple[Hole, ...]):
        if not holes:
            raise EmptyCourseError("Course has no holes to play")
        self._holes = tuple(holes)
        self._index_by_number = {h.hole_number: i for i, h in enumerate(self._holes)}

    @classmethod
    def from_course(cls, course: Course) -> "HoleRegistry":
        return cls(course.holes)

    def __len__(self) -> int:
        return len(self._holes)

    @property
    def first(self) -> Hole:
        return self._holes[0]

    def hole_at(self, index: int) -> Hole:
        """Hole at a pointer position. Raises HolePointerError if out of range."""
        if not 0 <= index < len(self._holes):
            raise HolePointerError(
                f"Hole pointer {index} outside 0-{len(self._holes) - 1}"
            )
        return self._holes[index]

    def contains(self, hole_number: int) -> bool:
        return hole_number in self._index_by_number

    def index_of(self, hole_number: int) -> Optional[int]:
        return self._index_by_number.get(hole_number)
