from __future__ import annotations

from conftest import FakeBackend, ScriptedInput, failing
from ssml_speak.errors import SpeechError
from ssml_speak.session import SpeechSession
from ssml_speak.state.model import SessionPhase, Voice


def make_session(catalog, backend, session_logger, *lines, clock=None) -> SpeechSession:
    kwargs = {"clock": clock} if clock is not None else {}
    return SpeechSession(catalog, backend, session_logger, ScriptedInput(*lines), **kwargs)


def test_end_to_end_hedda(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "2", "Hello", "exit")
    state = session.run()

    assert state.current_voice == Voice("Hedda", "de-DE")
    assert backend.spoken == [
        "<speak version='1.0' xmlns='http://www.w3.org/2001/10/synthesis' xml:lang='de-DE'>"
        "<voice name='Hedda'><p><s>Hello</s></p></voice></speak>"
    ]
    assert session.phase is SessionPhase.TERMINATED


def test_exit_command_with_extra_words_is_spoken(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "1", "exit now", "QUIT")
    session.run()

    assert len(backend.spoken) == 1
    assert "<p><s>exit now</s></p>" in backend.spoken[0]


def test_voice_switch_mid_session(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "1", "one", "Voice", "2", "two", "exit")
    session.run()

    assert "name='David'" in backend.spoken[0]
    assert "name='Hedda'" in backend.spoken[1]
    assert session.state.current_voice == Voice("Hedda", "de-DE")


def test_failure_does_not_end_session(catalog, session_logger, console) -> None:
    backend = FakeBackend(results=[failing("bad SSML")])
    read = ScriptedInput("1", "broken", "fine", "exit")
    session = SpeechSession(catalog, backend, session_logger, read)
    session.run()

    assert len(backend.spoken) == 2
    assert session.phase is SessionPhase.TERMINATED
    # the text prompt came back after the failure
    assert read.prompts.count(read.prompts[1]) == 3
    out = console.file.getvalue()
    assert "Speech failed" in out
    assert "Error: bad SSML" in out
    assert "Traceback (most recent call last):" in out


def test_duration_is_reported_rounded(catalog, backend, session_logger, console) -> None:
    ticks = iter([100.0, 102.5071])
    session = make_session(catalog, backend, session_logger, "1", clock=lambda: next(ticks))
    session.start()
    utterance = session.speak("Hello")

    assert utterance.duration == 2.507
    assert utterance.succeeded
    assert "Speech finished within 2.507 seconds." in console.file.getvalue()


def test_speaking_line_names_voice(catalog, backend, session_logger, console) -> None:
    make_session(catalog, backend, session_logger, "2", "Hallo", "quit").run()
    out = console.file.getvalue()
    assert "Speaking with voice: Hedda [de-DE]..." in out
    assert "Goodbye!" in out


def test_eof_terminates(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "1", "Hello")
    session.run()
    assert session.phase is SessionPhase.TERMINATED
    assert len(backend.spoken) == 1


def test_state_reflects_disabled_logging(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "1")
    state = session.start()
    assert state.logging_enabled is False
    assert state.log_path is None
    assert session.phase is SessionPhase.AWAITING_INPUT


def test_invalid_initial_choice_uses_default(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "9", "Hi", "exit")
    session.run()
    assert "name='David'" in backend.spoken[0]


def test_speech_error_from_result() -> None:
    err = SpeechError.from_result(failing("engine fault"))
    assert str(err) == "engine fault"
    assert err.kind == "engine"
    assert err.detail.startswith("Traceback")


def test_speak_returns_failed_utterance(catalog, session_logger) -> None:
    backend = FakeBackend(results=[failing("bad SSML")])
    session = make_session(catalog, backend, session_logger, "2")
    session.start()

    utterance = session.speak("broken")

    assert not utterance.succeeded
    assert utterance.voice == Voice("Hedda", "de-DE")
    assert utterance.prepared_ssml.endswith("<p><s>broken</s></p></voice></speak>")
    assert session.phase is SessionPhase.AWAITING_INPUT


class RaisingBackend(FakeBackend):
    def speak_ssml(self, ssml: str):
        self.spoken.append(ssml)
        raise RuntimeError("driver crashed")


def test_raising_backend_does_not_end_session(catalog, session_logger, console) -> None:
    backend = RaisingBackend()
    session = make_session(catalog, backend, session_logger, "1", "one", "two", "exit")
    session.run()

    assert len(backend.spoken) == 2
    assert session.phase is SessionPhase.TERMINATED
    out = console.file.getvalue()
    assert out.count("Speech failed") == 2
    assert "Error: driver crashed" in out


def test_huge_number_on_voice_switch_keeps_session(catalog, backend, session_logger) -> None:
    session = make_session(catalog, backend, session_logger, "9" * 5000, "Hi", "voice", "9" * 5000, "Again", "exit")
    session.run()

    assert session.phase is SessionPhase.TERMINATED
    assert len(backend.spoken) == 2
    assert all("name='David'" in ssml for ssml in backend.spoken)
