"""Ordered catalog of installed voices."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

from ..errors import EnumerationError
from ..speech.backends.base import SpeechBackend
from ..state.model import Voice
from ..telemetry.logger import get_logger


class VoiceCatalog(Sequence[Voice]):
    """Voices in the order the backend listed them.

    Built once per run: the 1-based position of a voice is what the user
    types to select it, so the listing must not be re-queried mid-session.
    """

    def __init__(self, voices: Iterable[Voice] = ()) -> None:
        self._voices: Tuple[Voice, ...] = tuple(voices)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> VoiceCatalog:
        voices = []
        for name, locale in pairs:
            if not name or not name.strip():
                get_logger().warning("Skipping unnamed voice (%s)", locale)
                continue
            voices.append(Voice(name=name, locale=locale))
        return cls(voices)

    @classmethod
    def load(cls, backend: SpeechBackend) -> VoiceCatalog:
        """Query ``backend`` once and build the catalog.

        Raises:
            EnumerationError: if the backend cannot list its voices
        """
        try:
            pairs = backend.list_voices()
        except Exception as exc:
            raise EnumerationError(f"Cannot list installed voices ({backend.name}): {exc}") from exc
        return cls.from_pairs(pairs)

    @property
    def default(self) -> Voice:
        return self._voices[0]

    def render(self) -> list[str]:
        return [f"{i}) {voice.name} [{voice.locale}]" for i, voice in enumerate(self._voices, 1)]

    def __getitem__(self, index):  # type: ignore[override]
        return self._voices[index]

    def __len__(self) -> int:
        return len(self._voices)

    def __iter__(self) -> Iterator[Voice]:
        return iter(self._voices)

    def __repr__(self) -> str:
        return f"VoiceCatalog({list(self._voices)!r})"
