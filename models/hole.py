from pydantic import Field, field_validator
from typing import Tuple

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """Represents a single hole on a golf course."""
    hole_number: int = Field(..., ge=1)
    par: int = Field(4, ge=3, le=6)
    yardage: int = Field(0, ge=0)
    description: str = ""
    notes: Tuple[str, ...] = ()

    @field_validator('notes')
    @classmethod
    def drop_blank_notes(cls, v):
        return tuple(n.strip() for n in v if n and n.strip())

    def with_note(self, note: str) -> "Hole":
        """Return this hole with `note` appended to its notes."""
        return self.evolve(notes=self.notes + (note,))
