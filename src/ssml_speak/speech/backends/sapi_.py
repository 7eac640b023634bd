"""Windows SAPI backend, speaks SSML natively through ``SAPI.SpVoice``."""

from __future__ import annotations

import locale
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Tuple

from ...telemetry.logger import get_logger
from ..ssml import extract_speech
from .base import Err, Ok, SpeakResult, SpeechBackend, normalize_locale


# SpeechVoiceSpeakFlags
SVSF_IS_XML = 8


def lcid_to_locale(lcid: str, fallback: str) -> str:
    """Convert a SAPI ``Language`` attribute (hex LCID, e.g. ``"409"``).

    Tokens may list several LCIDs separated by ``;``; the first one wins.
    """
    first = (lcid or "").split(";")[0].strip()
    try:
        code = int(first, 16)
    except ValueError:
        return fallback
    return normalize_locale(locale.windows_locale.get(code), fallback)


class SapiBackend(SpeechBackend):
    name = "sapi"

    def __init__(self, default_locale: str = "en-US", speaker: Any = None) -> None:
        if speaker is None:
            import win32com.client  # Windows only

            speaker = win32com.client.Dispatch("SAPI.SpVoice")
        self.default_locale = default_locale
        self.speaker = speaker
        self._tokens: Dict[str, Any] = {}
        self._logger = get_logger()

    def list_voices(self) -> List[Tuple[str, str]]:
        tokens = self.speaker.GetVoices()
        voices = []
        self._tokens = {}
        for i in range(tokens.Count):
            token = tokens.Item(i)
            name = token.GetAttribute("Name") or token.GetDescription()
            loc = lcid_to_locale(token.GetAttribute("Language"), self.default_locale)
            known = self._tokens.setdefault(name, token)
            if known is not token:
                self._logger.warning("Duplicate voice name %r, speaking it uses the first token", name)
            voices.append((name, loc))
        self._logger.debug("SAPI reported %d voices", len(voices))
        return voices

    def speak_ssml(self, ssml: str) -> SpeakResult:
        try:
            voice_name, _ = extract_speech(ssml)
        except ET.ParseError as exc:
            return Err.from_exception(exc, kind="ssml")
        try:
            token = self._tokens.get(voice_name) if voice_name else None
            if token is not None:
                self.speaker.Voice = token
            self.speaker.Speak(ssml, SVSF_IS_XML)
        except Exception as exc:  # pywintypes.com_error carries the HRESULT text
            self._logger.debug("SAPI speak failed", exc_info=True)
            return Err.from_exception(exc)
        return Ok()
