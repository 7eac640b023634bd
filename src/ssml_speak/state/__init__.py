"""State management module for the speech session."""

from .model import (
    Command,
    Exit,
    SessionPhase,
    SessionState,
    Speak,
    SwitchVoice,
    Utterance,
    Voice,
    classify_command,
    elapsed_seconds,
)

__all__ = [
    "Command",
    "Exit",
    "SessionPhase",
    "SessionState",
    "Speak",
    "SwitchVoice",
    "Utterance",
    "Voice",
    "classify_command",
    "elapsed_seconds",
]
