"""Voice input/output for a round session.

Speech recognition and speech synthesis are injected capabilities; either
(or both) may be missing, in which case the matching operations quietly do
nothing.
"""

import logging
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class SpeechInputListener(Protocol):
    def on_transcript(self, text: str) -> None:
        """Full-replace transcript of the current utterance."""
        ...

    def on_listening_changed(self, listening: bool) -> None: ...

    def on_error(self, error: str) -> None: ...


class SpeechInput(Protocol):
    """Speech-to-text. Emits events to the subscribed listener while active."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def subscribe(self, listener: SpeechInputListener) -> None: ...


class SpeechOutput(Protocol):
    """Text-to-speech. One utterance at a time."""

    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...


class VoiceIO:
    """Owns the session's single recognition session and its utterances.

    Usage:
        with VoiceIO(recognizer, synthesizer) as voice:
            voice.start_listening()
            ...
        # recognition stopped, utterance cancelled
    """

    def __init__(
        self,
        speech_input: Optional[SpeechInput] = None,
        speech_output: Optional[SpeechOutput] = None,
        *,
        speech_enabled: bool = True,
    ):
        self._input = speech_input
        self._output = speech_output
        self.speech_enabled = speech_enabled
        self.input_buffer = ""
        self.is_listening = False
        self._closed = False
        if self._input is not None:
            try:
                self._input.subscribe(self)
            except Exception:
                logger.warning("Speech input unavailable; continuing without it", exc_info=True)
                self._input = None

    @property
    def input_available(self) -> bool:
        return self._input is not None

    @property
    def output_available(self) -> bool:
        return self._output is not None

    @property
    def closed(self) -> bool:
        return self._closed

    # ================================================================
    # Speech input
    # ================================================================

    def start_listening(self) -> bool:
        """Begin a recognition session. Returns False if nothing was started."""
        if self._input is None or self._closed or self.is_listening:
            return False
        # Set before start() so a stop or error event raised during start wins.
        self.is_listening = True
        try:
            self._input.start()
        except Exception:
            logger.warning("Speech recognition failed to start", exc_info=True)
            self.is_listening = False
            return False
        return True

    def stop_listening(self) -> None:
        if self._input is None:
            return
        try:
            self._input.stop()
        except Exception:
            logger.warning("Speech recognition failed to stop cleanly", exc_info=True)
        self.is_listening = False

    def toggle_listening(self) -> None:
        if self.is_listening:
            self.stop_listening()
        else:
            self.start_listening()

    def take_input(self) -> str:
        """Return the current transcript and clear the buffer."""
        text, self.input_buffer = self.input_buffer, ""
        return text

    # Listener callbacks

    def on_transcript(self, text: str) -> None:
        self.input_buffer = text

    def on_listening_changed(self, listening: bool) -> None:
        self.is_listening = listening and not self._closed

    def on_error(self, error: str) -> None:
        logger.warning("Speech recognition error: %s", error)
        self.is_listening = False

    # ================================================================
    # Speech output
    # ================================================================

    def speak(self, text: str) -> None:
        """Say `text`, cutting off whatever is currently being said."""
        if self._output is None or self._closed or not self.speech_enabled:
            return
        try:
            self._output.cancel()
            self._output.speak(text)
        except Exception:
            logger.warning("Speech output failed", exc_info=True)

    def cancel_speech(self) -> None:
        if self._output is None:
            return
        try:
            self._output.cancel()
        except Exception:
            logger.warning("Speech output failed to cancel", exc_info=True)

    def toggle_speech(self) -> bool:
        """Flip the global speech switch. Turning it off silences the current utterance."""
        self.speech_enabled = not self.speech_enabled
        if not self.speech_enabled:
            self.cancel_speech()
        return self.speech_enabled

    # ================================================================
    # Lifecycle
    # ================================================================

    def close(self) -> None:
        """Release both capabilities. Safe to call more than once."""
        if self._closed:
            return
        self.stop_listening()
        self.cancel_speech()
        self._closed = True

    def __enter__(self) -> "VoiceIO":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
