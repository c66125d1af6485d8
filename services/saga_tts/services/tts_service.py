import logging
from typing import Optional, Protocol

import httpx
from openai import AsyncOpenAI, OpenAIError

from ..shared.config import Settings, get_settings
from ..shared.errors import ConfigurationError, SynthesisFailed

logger = logging.getLogger(__name__)


class SpeechProvider(Protocol):
    """Anything that turns a line of text into audio bytes for a voice"""

    name: str
    media_type: str
    extension: str

    async def synthesize(self, text: str, voice: str) -> bytes:
        ...


class OpenAISpeechService:
    """Service for OpenAI text-to-speech"""

    name = "openai"
    media_type = "audio/mpeg"
    extension = "mp3"

    def __init__(self, api_key: Optional[str], model: str = "gpt-4o-mini-tts", client=None):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("OPENAI_API_KEY environment variable is required")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def synthesize(self, text: str, voice: str) -> bytes:
        try:
            response = await self.client.audio.speech.create(
                model=self.model,
                voice=voice,
                input=text,
                response_format="mp3",
            )
        except OpenAIError as e:
            logger.error("OpenAI TTS failed for voice '%s': %s", voice, e)
            raise SynthesisFailed(f"TTS generation failed: {str(e)}") from e

        audio = response.content
        if not audio:
            raise SynthesisFailed("TTS generation failed: provider returned no audio")
        return audio


class DeepgramSpeechService:
    """Service for Deepgram TTS over the REST API; the voice id is the Deepgram model"""

    name = "deepgram"
    media_type = "audio/wav"
    extension = "wav"

    def __init__(self, api_key: Optional[str], transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.base_url = "https://api.deepgram.com"
        self.transport = transport

    async def synthesize(self, text: str, voice: str) -> bytes:
        if not self.api_key:
            raise ConfigurationError("DEEPGRAM_API_KEY environment variable is required")

        url = f"{self.base_url}/v1/speak"
        headers = {
            "Authorization": f"Token {self.api_key}",
            "Content-Type": "application/json"
        }
        params = {
            "model": voice,
            "encoding": "linear16",
            "container": "wav"
        }
        data = {"text": text}

        try:
            async with httpx.AsyncClient(timeout=30.0, transport=self.transport) as client:
                response = await client.post(
                    url,
                    headers=headers,
                    params=params,
                    json=data
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code}: {e.response.text[:500]}"
            logger.error("Deepgram TTS error: %s", error_msg)
            raise SynthesisFailed(f"TTS generation failed: {error_msg}") from e
        except httpx.HTTPError as e:
            logger.error("Deepgram TTS request failed: %s", e)
            raise SynthesisFailed(f"TTS generation failed: {str(e)}") from e

        if not response.content:
            raise SynthesisFailed("TTS generation failed: provider returned no audio")
        return response.content


def create_speech_provider(settings: Optional[Settings] = None) -> SpeechProvider:
    """Build the speech provider named by TTS_PROVIDER"""
    settings = settings or get_settings()
    if settings.tts_provider == "openai":
        return OpenAISpeechService(settings.openai_api_key, settings.openai_tts_model)
    if settings.tts_provider == "deepgram":
        return DeepgramSpeechService(settings.deepgram_api_key)
    raise ConfigurationError(f"Unknown TTS_PROVIDER '{settings.tts_provider}'")
