from pydantic import Field, model_validator
from typing import Optional, Tuple

from .base import BaseGolfModel
from .hole import Hole


class Course(BaseGolfModel):
    """Golf course with its ordered holes."""
    id: str
    name: str = Field(..., min_length=1)
    holes: Tuple[Hole, ...] = ()

    @model_validator(mode='after')
    def validate_hole_sequence(self):
        """Hole numbers must run 1..n in order, without gaps or repeats."""
        for index, hole in enumerate(self.holes):
            if hole.hole_number != index + 1:
                raise ValueError(
                    f"Hole at position {index + 1} is numbered {hole.hole_number}; "
                    f"holes must be numbered 1-{len(self.holes)} in order"
                )
        return self

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    @property
    def par(self) -> int:
        return sum(h.par for h in self.holes)

    def get_hole(self, number: int) -> Optional[Hole]:
        """Get a hole by its number."""
        if 1 <= number <= len(self.holes):
            return self.holes[number - 1]
        return None
