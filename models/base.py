from pydantic import BaseModel, ConfigDict
from typing import Any, TypeVar

M = TypeVar("M", bound="BaseGolfModel")


class BaseGolfModel(BaseModel):
    """Shared configuration and methods.

    Domain values are frozen: every change goes through `evolve`, which
    returns a new, re-validated instance and leaves the original untouched.
    """
    model_config = ConfigDict(frozen=True)

    def evolve(self: M, **changes: Any) -> M:
        """Return a validated copy with `changes` applied."""
        values = {name: getattr(self, name) for name in type(self).model_fields}
        values.update(changes)
        return type(self).model_validate(values)
