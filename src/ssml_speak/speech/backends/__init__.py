"""Speech backends implementing list_voices / speak_ssml."""

from .base import Err, Ok, SpeakResult, SpeechBackend

__all__ = ["Err", "Ok", "SpeakResult", "SpeechBackend"]
