import logging
from collections.abc import Mapping
from pydantic import ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional

from .base import BaseGolfModel
from .shot import ShotOutcome

logger = logging.getLogger(__name__)


class ExtractionPayload(BaseGolfModel):
    """Facts the assistant pulled out of one conversational turn.

    Every field is optional. Keys arrive camelCase from the assistant
    (`holeNumber`, `scoreOnHole`, ...) and are exposed snake_case.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hole_number: Optional[int] = Field(None, ge=1)
    club: Optional[str] = None
    outcome: Optional[ShotOutcome] = None
    score_on_hole: Optional[int] = Field(None, ge=1, le=20)
    course_note: Optional[str] = None
    player_tendency: Optional[str] = None

    @field_validator('club', 'course_note', 'player_tendency', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator('outcome', mode='before')
    @classmethod
    def parse_outcome(cls, v):
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            return ShotOutcome.parse(v)
        raise ValueError(f"Outcome must be text, got {type(v).__name__}")

    @property
    def has_shot(self) -> bool:
        return self.club is not None or self.outcome is not None

    @property
    def has_score(self) -> bool:
        return self.score_on_hole is not None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)

    @classmethod
    def from_raw(cls, raw: Any) -> "ExtractionPayload":
        """Validate an untrusted payload field by field.

        A malformed field is dropped and logged; it never blocks the others.
        Anything that is not a mapping yields an empty payload.
        """
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            logger.warning("Ignoring extraction payload of type %s", type(raw).__name__)
            return cls()

        accepted: Dict[str, Any] = {}
        for name, field in cls.model_fields.items():
            key = field.alias if field.alias in raw else name
            if key not in raw:
                continue
            try:
                single = cls.model_validate({name: raw[key]})
            except ValidationError as e:
                logger.warning(
                    "Dropping malformed extraction field %s=%r: %s",
                    key, raw[key], e.errors()[0]['msg'],
                )
                continue
            accepted[name] = getattr(single, name)
        return cls(**accepted)
