"""Character line -> stored audio URL orchestration"""

import logging
import re
from typing import Optional, Union

from ..shared.errors import ConfigurationError, MissingField, SynthesisFailed
from .storage_service import AudioStorage, build_audio_key
from .tts_service import SpeechProvider
from .voice_policy import VoicePolicy, assign_voice
from .voice_registry import VoiceRegistry

logger = logging.getLogger(__name__)


class SpeechRequestHandler:
    """
    Resolves a voice for a character, synthesizes the line and stores the
    audio. The only state touched is the injected registry.
    """

    def __init__(
        self,
        registry: VoiceRegistry,
        policy: VoicePolicy,
        provider: SpeechProvider,
        storage: AudioStorage,
        skip_pattern: Union[str, re.Pattern, None] = None,
    ):
        self.registry = registry
        self.policy = policy
        self.provider = provider
        self.storage = storage
        if isinstance(skip_pattern, str):
            try:
                skip_pattern = re.compile(skip_pattern, re.IGNORECASE) if skip_pattern else None
            except re.error as e:
                raise ConfigurationError(f"Invalid SKIP_CHARACTER_PATTERN: {e}") from e
        self.skip_pattern = skip_pattern

    def should_skip(self, character: str) -> bool:
        return bool(self.skip_pattern and self.skip_pattern.search(character.strip()))

    def resolve_voice(
        self,
        character: str,
        requested_voice: Optional[str] = None,
        description: Optional[str] = None,
        text: Optional[str] = None,
    ) -> str:
        if requested_voice and requested_voice.strip():
            voice = requested_voice.strip()
            self.registry.assign(character, voice)
            return voice

        selections = []

        def choose() -> str:
            selection = assign_voice(character, self.policy, description=description, text=text)
            selections.append(selection)
            return selection.voice

        voice, created = self.registry.get_or_assign(character, choose)
        if created:
            logger.info(
                "New character '%s' got voice '%s' (policy=%s, category=%s)",
                character, voice, self.policy.mode, selections[0].category or "none",
            )
        return voice

    async def handle(
        self,
        character: Optional[str],
        text: Optional[str],
        voice: Optional[str] = None,
        description: Optional[str] = None,
    ) -> dict:
        if not character or not character.strip() or not text or not text.strip():
            raise MissingField("Missing character or text field.")

        if self.should_skip(character):
            logger.info("Skipping player-controlled character '%s'", character)
            return {"skipped": True, "character": character}

        voice_used = self.resolve_voice(character, voice, description, text)

        audio = await self.provider.synthesize(text, voice_used)
        if not audio:
            raise SynthesisFailed(f"TTS provider returned no audio for voice '{voice_used}'")
        key = build_audio_key(character, self.provider.extension)
        audio_url = await self.storage.store(audio, key, self.provider.media_type)

        return {
            "audioUrl": audio_url,
            "voiceUsed": voice_used,
            "character": character,
        }
