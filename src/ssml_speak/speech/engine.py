"""Backend factory: picks the speech backend from settings."""

from __future__ import annotations

import sys
from typing import Optional

from ..config import AppSettings
from .backends.base import SpeechBackend


def resolve_backend_name(setting: str, platform: Optional[str] = None) -> str:
    """Map ``auto`` to the native backend of the platform."""
    if setting != "auto":
        return setting
    platform = platform or sys.platform
    return "sapi" if platform == "win32" else "pyttsx3"


def create_backend(settings: Optional[AppSettings] = None) -> SpeechBackend:
    settings = settings or AppSettings()
    name = resolve_backend_name(settings.BACKEND)
    if name == "sapi":
        from .backends.sapi_ import SapiBackend

        return SapiBackend(default_locale=settings.DEFAULT_LOCALE)

    from .backends.pyttsx3_ import Pyttsx3Backend

    return Pyttsx3Backend(default_locale=settings.DEFAULT_LOCALE, rate=settings.SPEECH_RATE)
