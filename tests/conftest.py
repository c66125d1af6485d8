"""Shared fakes for the relay's external collaborators"""

import pytest

from saga_tts.services.voice_policy import VoicePolicy
from saga_tts.services.voice_registry import VoiceRegistry
from saga_tts.shared.errors import StorageFailed, SynthesisFailed


class FakeSpeechProvider:
    name = "fake"
    media_type = "audio/mpeg"
    extension = "mp3"

    def __init__(self, audio=b"ID3-fake-audio", fail=False):
        self.audio = audio
        self.fail = fail
        self.calls = []

    async def synthesize(self, text, voice):
        self.calls.append((text, voice))
        if self.fail:
            raise SynthesisFailed("TTS generation failed: provider unavailable")
        return self.audio


class FakeAudioStorage:
    def __init__(self, fail=False):
        self.fail = fail
        self.objects = {}

    async def store(self, data, key, content_type):
        if self.fail:
            raise StorageFailed("Audio upload failed: bucket unreachable")
        self.objects[key] = (data, content_type)
        return f"https://cdn.example.test/{key}"


@pytest.fixture
def policy():
    return VoicePolicy(
        mode="hash",
        pool=("alloy", "echo", "fable", "onyx", "nova"),
        gender_pools={
            "male": ("onyx", "echo"),
            "female": ("nova", "shimmer"),
            "neutral": ("alloy",),
        },
        narrator_names=("saga", "narrator"),
        narrator_voice="verse",
    )


@pytest.fixture
def registry():
    return VoiceRegistry()


@pytest.fixture
def provider():
    return FakeSpeechProvider()


@pytest.fixture
def storage():
    return FakeAudioStorage()
