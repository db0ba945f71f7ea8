import logging
from enum import Enum
from typing import Callable, Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class Cue(str, Enum):
    """Ambient sound effect selected by the assistant for a turn."""
    DISCOVERY = "discovery"
    UPDATE = "update"
    MEMORY = "memory"
    ACHIEVEMENT = "achievement"
    LOG = "log"


class CuePlayback(Protocol):
    """Sound effects. Every call is fire-and-forget and returns immediately."""

    def start_round(self) -> None: ...
    def discovery_chime(self) -> None: ...
    def update_ping(self) -> None: ...
    def memory_tone(self) -> None: ...
    def achievement_sound(self) -> None: ...
    def shot_logged(self) -> None: ...


class NullCuePlayback:
    """Silent playback for environments without audio."""

    def start_round(self) -> None:
        pass

    def discovery_chime(self) -> None:
        pass

    def update_ping(self) -> None:
        pass

    def memory_tone(self) -> None:
        pass

    def achievement_sound(self) -> None:
        pass

    def shot_logged(self) -> None:
        pass


_CUE_ACTIONS: Dict[Cue, Callable[[CuePlayback], None]] = {
    Cue.DISCOVERY: lambda p: p.discovery_chime(),
    Cue.UPDATE: lambda p: p.update_ping(),
    Cue.MEMORY: lambda p: p.memory_tone(),
    Cue.ACHIEVEMENT: lambda p: p.achievement_sound(),
    Cue.LOG: lambda p: p.shot_logged(),
}

_unmapped = set(Cue) - set(_CUE_ACTIONS)
if _unmapped:
    raise RuntimeError(f"Cues without a playback action: {sorted(c.value for c in _unmapped)}")


def parse_cue(value: Union[Cue, str, None]) -> Optional[Cue]:
    """Map a cue tag to a Cue. Unknown or absent tags give None."""
    if value is None or isinstance(value, Cue):
        return value
    try:
        return Cue(value.strip().lower())
    except (AttributeError, ValueError):
        return None


class CueDispatcher:
    """Plays exactly one sound per recognised cue; everything else is a no-op."""

    def __init__(self, playback: Optional[CuePlayback] = None):
        self._playback = playback or NullCuePlayback()

    def dispatch(self, cue: Union[Cue, str, None]) -> Optional[Cue]:
        """Play the cue. Returns the cue played, or None if nothing was played."""
        parsed = parse_cue(cue)
        if parsed is None:
            if cue is not None:
                logger.debug("Ignoring unknown cue %r", cue)
            return None
        self._fire(_CUE_ACTIONS[parsed], parsed.value)
        return parsed

    def start_round(self) -> None:
        self._fire(lambda p: p.start_round(), "start_round")

    def _fire(self, action: Callable[[CuePlayback], None], label: str) -> None:
        try:
            action(self._playback)
        except Exception:
            logger.exception("Cue playback failed for %s", label)
