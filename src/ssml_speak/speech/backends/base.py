"""Speech backend base interface and result types."""

from __future__ import annotations

import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Ok:
    ok = True


@dataclass(frozen=True)
class Err:
    kind: str
    message: str
    detail: Optional[str] = None

    ok = False

    @classmethod
    def from_exception(cls, exc: BaseException, kind: str = "engine") -> Err:
        detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return cls(kind=kind, message=str(exc) or type(exc).__name__, detail=detail)


SpeakResult = Union[Ok, Err]


class SpeechBackend(ABC):
    """Adapter over a platform speech engine.

    ``list_voices`` may raise; the catalog wraps failures. ``speak_ssml``
    must not raise: it blocks until the utterance is done and reports
    failures as :class:`Err`.
    """

    name: str = "abstract"

    @abstractmethod
    def list_voices(self) -> List[Tuple[str, str]]:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def speak_ssml(self, ssml: str) -> SpeakResult:  # pragma: no cover
        raise NotImplementedError


def normalize_locale(raw: object, fallback: str) -> str:
    """Normalise an engine language tag to ``ll-CC`` form.

    Handles ``en_US``, ``en-us`` and espeak's bytes tags such as
    ``b"\\x05en-us"`` (leading priority byte).
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="ignore")
    if not isinstance(raw, str):
        return fallback
    tag = "".join(ch for ch in raw if ch.isprintable()).strip().replace("_", "-")
    if not tag:
        return fallback
    parts = tag.split("-")
    head = parts[0].lower()
    rest = [p.upper() if len(p) == 2 else p for p in parts[1:]]
    return "-".join([head, *rest])
