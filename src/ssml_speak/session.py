"""Interactive speech session.

The loop reads one line at a time, classifies it into a command and either
switches voice, speaks the text, or terminates. A failed speak call is
reported and the loop carries on; nothing raised per iteration ends the
session.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from .errors import SpeechError
from .speech.backends.base import Err, SpeechBackend
from .speech.ssml import to_ssml
from .state.model import (
    Command,
    Exit,
    SessionPhase,
    SessionState,
    Speak,
    SwitchVoice,
    Utterance,
    classify_command,
)
from .telemetry.logger import SessionLogger, timestamp
from .voices.catalog import VoiceCatalog
from .voices.selector import VoiceSelector


TEXT_PROMPT = "Enter text to speak ('voice' to change voice, 'exit' or 'quit' to leave): "
FAILURE_BANNER = "=" * 20 + " Speech failed " + "=" * 20
CLOSING_BANNER = "=" * 55


class SpeechSession:
    """Owns the session state and drives the read/speak loop."""

    def __init__(
        self,
        catalog: VoiceCatalog,
        backend: SpeechBackend,
        logger: SessionLogger,
        read_line: Callable[[str], str],
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.catalog = catalog
        self.backend = backend
        self.logger = logger
        self.read_line = read_line
        self.clock = clock
        self.selector = VoiceSelector(logger, read_line)
        self.phase = SessionPhase.SELECTING_VOICE
        self.state: Optional[SessionState] = None

    def start(self) -> SessionState:
        """Initial voice selection."""
        self.phase = SessionPhase.SELECTING_VOICE
        voice = self.selector.prompt_selection(self.catalog)
        self.state = SessionState(
            current_voice=voice,
            logging_enabled=self.logger.active,
            log_path=self.logger.path if self.logger.active else None,
        )
        self.phase = SessionPhase.AWAITING_INPUT
        return self.state

    def run(self) -> SessionState:
        if self.state is None:
            self.start()
        while self.phase is not SessionPhase.TERMINATED:
            try:
                line = self.read_line(TEXT_PROMPT)
            except EOFError:
                line = "exit"
            self.handle(classify_command(line))
        assert self.state is not None
        return self.state

    def handle(self, command: Command) -> None:
        if isinstance(command, Exit):
            self.logger.write(f"Goodbye! ({timestamp()})", also_to_console=True, style="blue")
            self.phase = SessionPhase.TERMINATED
        elif isinstance(command, SwitchVoice):
            self.phase = SessionPhase.SELECTING_VOICE
            self.state = self.selector.switch(self._require_state(), self.catalog)
            self.phase = SessionPhase.AWAITING_INPUT
        elif isinstance(command, Speak):
            self.speak(command.text)
        else:  # pragma: no cover
            raise TypeError(f"Unknown command: {command!r}")

    def speak(self, text: str) -> Utterance:
        state = self._require_state()
        voice = state.current_voice
        self.phase = SessionPhase.SPEAKING
        utterance = Utterance(
            raw_input=text,
            prepared_ssml=to_ssml(text, voice),
            voice=voice,
            start=0.0,
        )

        self.logger.write(f"Speaking with voice: {voice}...", also_to_console=True)
        utterance.start = self.clock()
        try:
            utterance.outcome = self.backend.speak_ssml(utterance.prepared_ssml)
        except Exception as exc:  # third-party backends may still raise
            utterance.outcome = Err.from_exception(exc)
        utterance.end = self.clock()

        if isinstance(utterance.outcome, Err):
            self._report_failure(SpeechError.from_result(utterance.outcome))
        else:
            self.logger.write(
                f"Speech finished within {utterance.duration} seconds.",
                also_to_console=True,
                style="green",
            )

        self.phase = SessionPhase.AWAITING_INPUT
        return utterance

    def _report_failure(self, error: SpeechError) -> None:
        self.logger.write(FAILURE_BANNER, also_to_console=True, style="red")
        self.logger.write(f"Error: {error}", also_to_console=True, style="red")
        if error.detail:
            self.logger.write(error.detail.rstrip(), also_to_console=True, style="dim")
        self.logger.write(CLOSING_BANNER, also_to_console=True, style="red")

    def _require_state(self) -> SessionState:
        if self.state is None:
            raise RuntimeError("Session has not selected a voice yet; call start() first")
        return self.state
