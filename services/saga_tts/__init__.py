"""Saga TTS relay: character dialogue to speech with stable per-character voices"""

__version__ = "1.0.0"
