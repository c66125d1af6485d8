"""Session scoped character -> voice registry"""

import logging
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple

from ..shared.errors import InvalidPayload
from .voice_policy import normalize_name

logger = logging.getLogger(__name__)


class VoiceRegistry:
    """
    In-memory mapping of character names to voice ids.

    Keys are normalized (trimmed, lower-cased) for lookup; the first
    spelling seen for a character is kept for export. State lives only as
    long as the process, callers persist it through export_all/import_all.
    """

    def __init__(self, voices: Optional[Dict[str, str]] = None):
        self._lock = Lock()
        # normalized name -> (display name, voice id)
        self._entries: Dict[str, Tuple[str, str]] = {}
        if voices:
            self.import_all(voices)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def lookup(self, name: str) -> Optional[str]:
        entry = self._entries.get(normalize_name(name))
        return entry[1] if entry else None

    def assign(self, name: str, voice_id: str) -> None:
        with self._lock:
            self._set(name, voice_id)

    def get_or_assign(self, name: str, choose: Callable[[], str]) -> Tuple[str, bool]:
        """
        Return the voice for ``name``, calling ``choose`` to pick one if the
        character is new. The check and the insert happen under one lock so
        concurrent first requests agree on a single voice.

        Returns:
            (voice id, True if it was assigned by this call)
        """
        key = normalize_name(name)
        with self._lock:
            entry = self._entries.get(key)
            if entry:
                return entry[1], False
            voice_id = choose()
            self._entries[key] = (name.strip(), voice_id)
        logger.info("Assigned voice '%s' to character '%s'", voice_id, name)
        return voice_id, True

    def export_all(self) -> Dict[str, str]:
        with self._lock:
            return {display: voice for display, voice in self._entries.values()}

    def import_all(self, mapping: Any) -> Dict[str, str]:
        """
        Merge ``mapping`` into the registry, overwriting on collision.

        Raises:
            InvalidPayload: if ``mapping`` is not a flat mapping of non-empty
                strings to non-empty strings. Nothing is merged in that case.
        """
        if not isinstance(mapping, dict):
            raise InvalidPayload("Invalid voice mapping: expected an object of character to voice")
        for name, voice in mapping.items():
            if not isinstance(name, str) or not name.strip():
                raise InvalidPayload(f"Invalid voice mapping: bad character name {name!r}")
            if not isinstance(voice, str) or not voice.strip():
                raise InvalidPayload(f"Invalid voice mapping: bad voice for '{name}'")

        with self._lock:
            for name, voice in mapping.items():
                self._set(name, voice.strip())
            merged = {display: v for display, v in self._entries.values()}
        logger.info("Imported %d voice assignments (%d total)", len(mapping), len(merged))
        return merged

    def _set(self, name: str, voice_id: str) -> None:
        key = normalize_name(name)
        existing = self._entries.get(key)
        display = existing[0] if existing else name.strip()
        self._entries[key] = (display, voice_id)
