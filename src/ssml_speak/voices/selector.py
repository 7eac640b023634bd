"""Interactive voice selection.

Invalid input never triggers a re-prompt: it falls back to the first voice
with a warning so the session keeps moving.
"""

from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from ..errors import InvalidSelectionInput, NoVoicesAvailable
from ..state.model import SessionState, Voice
from ..telemetry.logger import SessionLogger
from .catalog import VoiceCatalog


_NUMBER_PATTERN = re.compile(r"[0-9]+")

SELECTION_PROMPT = "Enter the number corresponding to your choice (1-{count}): "


def resolve_selection(catalog: VoiceCatalog, raw: str) -> Tuple[Voice, Optional[InvalidSelectionInput]]:
    """Map a raw selection line to a voice.

    Args:
        catalog: Voices available this run
        raw: Line typed by the user

    Returns:
        The selected voice, and the recovered input problem if the default
        voice was used instead

    Raises:
        NoVoicesAvailable: if the catalog is empty
    """
    if not catalog:
        raise NoVoicesAvailable()

    default = catalog.default
    if not _NUMBER_PATTERN.fullmatch(raw):
        return default, InvalidSelectionInput(
            f"Invalid input '{raw}'. Using default voice: {default}"
        )

    # more digits than the catalog size can never be in range; skip int()
    digits = raw.lstrip("0") or "0"
    if len(digits) <= len(str(len(catalog))):
        n = int(digits)
        if 1 <= n <= len(catalog):
            return catalog[n - 1], None
    shown = digits if len(digits) <= 12 else digits[:12] + "..."
    return default, InvalidSelectionInput(
        f"Number {shown} is out of range (1-{len(catalog)}). Using default voice: {default}"
    )


class VoiceSelector:
    """Presents the catalog and reads one selection line."""

    def __init__(self, logger: SessionLogger, read_line: Callable[[str], str]) -> None:
        self.logger = logger
        self.read_line = read_line

    def prompt_selection(self, catalog: VoiceCatalog) -> Voice:
        if not catalog:
            raise NoVoicesAvailable()

        self.logger.write("Available voices:", also_to_console=True, style="bold")
        for line in catalog.render():
            self.logger.write(line, also_to_console=True)

        try:
            raw = self.read_line(SELECTION_PROMPT.format(count=len(catalog)))
        except EOFError:
            raw = ""
        voice, problem = resolve_selection(catalog, raw)
        if problem is not None:
            self.logger.write(str(problem), also_to_console=True, style="yellow")
        self.logger.write(f"Selected voice: {voice}", also_to_console=True, style="green")
        return voice

    def switch(self, state: SessionState, catalog: VoiceCatalog) -> SessionState:
        return state.with_voice(self.prompt_selection(catalog))
