"""Voice catalog and interactive selection."""

from .catalog import VoiceCatalog
from .selector import VoiceSelector, resolve_selection

__all__ = ["VoiceCatalog", "VoiceSelector", "resolve_selection"]
