"""Types for the speech session: voices, session state, commands, utterances."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..speech.backends.base import SpeakResult


@dataclass(frozen=True)
class Voice:
    """Immutable installed voice."""
    name: str
    locale: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Voice name must not be empty")

    def __str__(self) -> str:
        return f"{self.name} [{self.locale}]"


class SessionPhase(str, Enum):
    """States of the interactive loop."""
    SELECTING_VOICE = "selecting_voice"
    AWAITING_INPUT = "awaiting_input"
    SPEAKING = "speaking"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class SessionState:
    """Session state, replaced (never mutated) on voice selection."""
    current_voice: Voice
    logging_enabled: bool = False
    log_path: Optional[Path] = None

    def with_voice(self, voice: Voice) -> SessionState:
        return replace(self, current_voice=voice)


@dataclass(frozen=True)
class Exit:
    """Leave the session (`exit` / `quit`)."""


@dataclass(frozen=True)
class SwitchVoice:
    """Re-enter voice selection (`voice`)."""


@dataclass(frozen=True)
class Speak:
    """Speak a line of text."""
    text: str


Command = Union[Exit, SwitchVoice, Speak]

EXIT_WORDS = frozenset({"exit", "quit"})
VOICE_WORD = "voice"


def classify_command(line: str) -> Command:
    """Turn a raw input line into a command.

    Keywords match case-insensitively against the whole line, so
    ``"exit now"`` is text to speak, not the exit command.
    """
    lowered = line.lower()
    if lowered in EXIT_WORDS:
        return Exit()
    if lowered == VOICE_WORD:
        return SwitchVoice()
    return Speak(line)


def elapsed_seconds(start: float, end: float) -> float:
    """Elapsed time between two clock readings, rounded to milliseconds."""
    return round(end - start, 3)


@dataclass
class Utterance:
    """One speak request, created per loop iteration."""
    raw_input: str
    prepared_ssml: str
    voice: Voice
    start: float
    end: float = 0.0
    outcome: Optional[SpeakResult] = field(default=None)

    @property
    def duration(self) -> float:
        return elapsed_seconds(self.start, self.end)

    @property
    def succeeded(self) -> bool:
        return self.outcome is not None and self.outcome.ok
