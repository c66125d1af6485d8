"""API routes for the TTS relay"""

from . import tts, voices

__all__ = ["tts", "voices"]
