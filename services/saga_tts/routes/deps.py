from fastapi import Request

from ..services.speech_service import SpeechRequestHandler
from ..services.voice_registry import VoiceRegistry


def get_speech_handler(request: Request) -> SpeechRequestHandler:
    return request.app.state.speech_handler


def get_voice_registry(request: Request) -> VoiceRegistry:
    return request.app.state.voice_registry
