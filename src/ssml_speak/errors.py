"""Error taxonomy for the speech console.

Only startup errors (:class:`EnumerationError`, :class:`NoVoicesAvailable`)
are allowed to end the process. Everything raised or reported while the
session loop is running is contained within a single iteration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .speech.backends.base import Err


class SpeakError(Exception):
    """Base class for every error raised by ssml_speak."""


class EnumerationError(SpeakError):
    """Raised when installed voices cannot be retrieved from the backend."""


class NoVoicesAvailable(SpeakError):
    """Raised when the voice catalog is empty."""

    def __init__(self, message: str = "No text-to-speech voices are installed.") -> None:
        super().__init__(message)


class InvalidSelectionInput(SpeakError):
    """Non-numeric or out-of-range voice choice.

    Recovered by the selector (default voice + warning), never propagated.
    """


class SpeechError(SpeakError):
    """A speak call failed (bad SSML, engine fault, device unavailable)."""

    def __init__(self, message: str, kind: str = "engine", detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.detail = detail

    @classmethod
    def from_result(cls, err: "Err") -> "SpeechError":
        return cls(err.message, kind=err.kind, detail=err.detail)


class LogWriteError(SpeakError):
    """The session log sink could not be opened or written."""
