from session import VoiceIO


# ================================================================
# Speech input
# ================================================================

def test_listening_round_trip(speech_input):
    voice = VoiceIO(speech_input)
    assert voice.start_listening()
    assert voice.is_listening

    speech_input.say("Driver")
    speech_input.say("Driver down the middle")
    assert voice.input_buffer == "Driver down the middle"

    voice.stop_listening()
    assert not voice.is_listening
    assert voice.take_input() == "Driver down the middle"
    assert voice.input_buffer == ""


def test_start_listening_is_noop_while_listening(speech_input):
    voice = VoiceIO(speech_input)
    voice.start_listening()
    assert not voice.start_listening()
    assert speech_input.started == 1


def test_toggle_listening(speech_input):
    voice = VoiceIO(speech_input)
    voice.toggle_listening()
    assert voice.is_listening
    voice.toggle_listening()
    assert not voice.is_listening
    assert speech_input.stopped == 1


def test_recognition_error_stops_listening(speech_input):
    voice = VoiceIO(speech_input)
    voice.start_listening()
    voice.on_error("no-speech")
    assert not voice.is_listening


def test_failed_start_leaves_voice_idle(speech_input):
    def refuse():
        raise OSError("microphone busy")

    speech_input.start = refuse
    voice = VoiceIO(speech_input)
    assert not voice.start_listening()
    assert not voice.is_listening


def test_missing_input_capability():
    voice = VoiceIO()
    assert not voice.input_available
    assert not voice.start_listening()
    voice.stop_listening()
    voice.toggle_listening()
    assert not voice.is_listening


def test_listening_before_recognizer_confirms(speech_input):
    speech_input.start = lambda: None    # no listening event yet
    voice = VoiceIO(speech_input)

    assert voice.start_listening()
    assert voice.is_listening
    assert not voice.start_listening()

    voice.stop_listening()
    assert not voice.is_listening
    assert speech_input.stopped == 1


def test_error_during_start_wins(speech_input):
    speech_input.start = lambda: speech_input.listener.on_error("not-allowed")
    voice = VoiceIO(speech_input)

    voice.start_listening()
    assert not voice.is_listening


# ================================================================
# Speech output
# ================================================================

def test_speak_cancels_previous_utterance(speech_output):
    voice = VoiceIO(speech_output=speech_output)
    voice.speak("First")
    voice.speak("Second")
    assert speech_output.spoken == ["First", "Second"]
    assert speech_output.cancelled == 2


def test_toggle_speech_silences_output(speech_output):
    voice = VoiceIO(speech_output=speech_output)
    assert voice.toggle_speech() is False
    assert speech_output.cancelled == 1

    voice.speak("Not heard")
    assert speech_output.spoken == []

    assert voice.toggle_speech() is True
    voice.speak("Heard")
    assert speech_output.spoken == ["Heard"]


def test_speech_disabled_from_start(speech_output):
    voice = VoiceIO(speech_output=speech_output, speech_enabled=False)
    voice.speak("Quiet")
    assert speech_output.spoken == []


def test_missing_output_capability():
    voice = VoiceIO()
    assert not voice.output_available
    voice.speak("Nobody hears this")
    voice.cancel_speech()


def test_output_failure_is_swallowed(speech_output):
    def explode(text):
        raise RuntimeError("synth crashed")

    speech_output.speak = explode
    VoiceIO(speech_output=speech_output).speak("Hello")


# ================================================================
# Lifecycle
# ================================================================

def test_close_releases_both_capabilities(speech_input, speech_output):
    with VoiceIO(speech_input, speech_output) as voice:
        voice.start_listening()

    assert voice.closed
    assert not voice.is_listening
    assert speech_input.stopped == 1
    assert speech_output.cancelled == 1

    voice.close()
    assert speech_input.stopped == 1

    assert not voice.start_listening()
    voice.speak("After close")
    assert speech_output.spoken == []
