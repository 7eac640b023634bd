"""Minimal SSML preparation.

User text is wrapped in a paragraph/sentence pair and embedded in a
``<speak>`` envelope naming the current voice. Text is not escaped: literal
``<`` or ``&`` typed by the user reaches the engine as markup.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from ..state.model import Voice


OPEN_TAGS = "<p><s>"
CLOSE_TAGS = "</s></p>"
SSML_NAMESPACE = "http://www.w3.org/2001/10/synthesis"

_ENVELOPE = (
    "<speak version='1.0' xmlns='" + SSML_NAMESPACE + "' xml:lang='{locale}'>"
    "<voice name='{name}'>{fragment}</voice></speak>"
)


def prepare_text(raw: str) -> str:
    """Trim ``raw`` and add whichever of the wrapper tags is missing.

    The opening and closing checks are independent, so text that already
    starts with ``<p><s>`` only gets ``</s></p>`` appended and vice versa.
    """
    text = raw.strip()
    if not text.startswith(OPEN_TAGS):
        text = OPEN_TAGS + text
    if not text.endswith(CLOSE_TAGS):
        text = text + CLOSE_TAGS
    return text


def build_envelope(fragment: str, voice: "Voice") -> str:
    return _ENVELOPE.format(locale=voice.locale, name=voice.name, fragment=fragment)


def to_ssml(raw: str, voice: "Voice") -> str:
    return build_envelope(prepare_text(raw), voice)


def extract_speech(ssml: str) -> Tuple[Optional[str], str]:
    """Return ``(voice_name, text)`` from a ``<speak>`` envelope.

    Raises:
        ET.ParseError: if the envelope is not well-formed XML
    """
    root = ET.fromstring(ssml)
    voice = root.find(f"{{{SSML_NAMESPACE}}}voice")
    if voice is None:
        voice = root.find("voice")
    name = voice.get("name") if voice is not None else None
    text = " ".join("".join(root.itertext()).split())
    return name, text
