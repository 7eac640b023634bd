from __future__ import annotations

import io
from typing import Iterable, List, Optional, Sequence, Tuple

import pytest
from rich.console import Console

from ssml_speak.speech.backends.base import Err, Ok, SpeakResult, SpeechBackend
from ssml_speak.telemetry.logger import SessionLogger
from ssml_speak.voices.catalog import VoiceCatalog


VOICES = (("David", "en-US"), ("Hedda", "de-DE"))


class FakeBackend(SpeechBackend):
    name = "fake"

    def __init__(
        self,
        voices: Sequence[Tuple[str, str]] = VOICES,
        results: Iterable[SpeakResult] = (),
        list_error: Optional[Exception] = None,
    ) -> None:
        self.voices = list(voices)
        self.results: List[SpeakResult] = list(results)
        self.list_error = list_error
        self.list_calls = 0
        self.spoken: List[str] = []

    def list_voices(self) -> List[Tuple[str, str]]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.voices)

    def speak_ssml(self, ssml: str) -> SpeakResult:
        self.spoken.append(ssml)
        if self.results:
            return self.results.pop(0)
        return Ok()


class ScriptedInput:
    """Feeds lines to prompts; raises EOFError once exhausted."""

    def __init__(self, *lines: str) -> None:
        self.lines = list(lines)
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def failing(message: str = "device unavailable") -> Err:
    return Err(kind="engine", message=message, detail="Traceback (most recent call last):\n  boom")


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, highlight=False)


@pytest.fixture
def session_logger(console: Console) -> SessionLogger:
    return SessionLogger(console, enabled=False)


@pytest.fixture
def catalog() -> VoiceCatalog:
    return VoiceCatalog.from_pairs(VOICES)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()
