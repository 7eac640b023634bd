"""pyttsx3 backend (SAPI5 / NSSpeechSynthesizer / espeak drivers)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Optional, Tuple

import pyttsx3

from ...telemetry.logger import get_logger
from ..ssml import extract_speech
from .base import Err, Ok, SpeakResult, SpeechBackend, normalize_locale


class Pyttsx3Backend(SpeechBackend):
    """Speaks through pyttsx3.

    pyttsx3 drivers only take plain text, so the envelope is parsed: the
    ``<voice name>`` picks the engine voice and the text content is spoken.
    """

    name = "pyttsx3"

    def __init__(
        self,
        default_locale: str = "en-US",
        rate: Optional[int] = None,
        engine: Any = None,
    ) -> None:
        self.default_locale = default_locale
        self.rate = rate
        self._engine = engine
        self._voice_ids: Dict[str, str] = {}
        self._logger = get_logger()

    @property
    def engine(self) -> Any:
        if self._engine is None:
            self._engine = pyttsx3.init()
            if self.rate is not None:
                self._engine.setProperty("rate", self.rate)
        return self._engine

    def list_voices(self) -> List[Tuple[str, str]]:
        voices = []
        self._voice_ids = {}
        for v in self.engine.getProperty("voices") or []:
            languages = list(getattr(v, "languages", None) or [])
            locale = normalize_locale(languages[0] if languages else None, self.default_locale)
            name = getattr(v, "name", None) or ""
            known = self._voice_ids.setdefault(name, v.id)
            if known != v.id:
                self._logger.warning("Duplicate voice name %r, speaking it uses the first one (%s)", name, known)
            voices.append((name, locale))
        self._logger.debug("pyttsx3 reported %d voices", len(voices))
        return voices

    def speak_ssml(self, ssml: str) -> SpeakResult:
        try:
            voice_name, text = extract_speech(ssml)
        except ET.ParseError as exc:
            return Err.from_exception(exc, kind="ssml")
        try:
            if voice_name and not self._voice_ids:
                self.list_voices()
            if voice_name:
                voice_id = self._voice_ids.get(voice_name)
                if voice_id is None:
                    return Err(kind="voice", message=f"Voice not installed: {voice_name}")
                self.engine.setProperty("voice", voice_id)
            self.engine.say(text)
            self.engine.runAndWait()
        except Exception as exc:  # driver errors are not typed by pyttsx3
            self._logger.debug("pyttsx3 speak failed", exc_info=True)
            return Err.from_exception(exc)
        return Ok()
