import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


# --- Configuration ---

DEFAULT_ASSISTANT_NAME = "JP"
DEFAULT_CONDITIONS = "Clear skies, 5 mph wind"
DEFAULT_ASSISTANT_TIMEOUT = 30.0

_FALSE_VALUES = {"0", "false", "no", "off"}
_NO_TIMEOUT_VALUES = {"", "none", "off", "0"}


class SessionSettings(BaseModel):
    """Tunable behaviour of a round session."""
    assistant_name: str = Field(DEFAULT_ASSISTANT_NAME, min_length=1)
    speech_enabled: bool = True
    # None disables the bounded wait on the assistant round-trip.
    assistant_timeout_seconds: Optional[float] = Field(DEFAULT_ASSISTANT_TIMEOUT, gt=0)
    default_conditions: str = DEFAULT_CONDITIONS

    @classmethod
    def from_env(cls) -> "SessionSettings":
        """Build settings from CADDIE_* environment variables (and .env)."""
        timeout_raw = os.environ.get("CADDIE_ASSISTANT_TIMEOUT")
        if timeout_raw is None:
            timeout = DEFAULT_ASSISTANT_TIMEOUT
        elif timeout_raw.strip().lower() in _NO_TIMEOUT_VALUES:
            timeout = None
        else:
            timeout = float(timeout_raw)

        return cls(
            assistant_name=os.environ.get("CADDIE_ASSISTANT_NAME", DEFAULT_ASSISTANT_NAME),
            speech_enabled=(
                os.environ.get("CADDIE_SPEECH_ENABLED", "true").strip().lower()
                not in _FALSE_VALUES
            ),
            assistant_timeout_seconds=timeout,
            default_conditions=os.environ.get("CADDIE_CONDITIONS", DEFAULT_CONDITIONS),
        )
