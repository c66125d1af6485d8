"""Voice assignment, speech synthesis and audio storage services"""

from .speech_service import SpeechRequestHandler
from .storage_service import InlineAudioStorage, S3AudioStorage, create_audio_storage
from .tts_service import DeepgramSpeechService, OpenAISpeechService, create_speech_provider
from .voice_policy import VoicePolicy, VoiceSelection, assign_voice, detect_gender, stable_hash
from .voice_registry import VoiceRegistry

__all__ = [
    "SpeechRequestHandler",
    "VoiceRegistry",
    "VoicePolicy",
    "VoiceSelection",
    "assign_voice",
    "detect_gender",
    "stable_hash",
    "OpenAISpeechService",
    "DeepgramSpeechService",
    "create_speech_provider",
    "S3AudioStorage",
    "InlineAudioStorage",
    "create_audio_storage",
]
