"""Interactive SSML text-to-speech console."""

__version__ = "0.1.0"
