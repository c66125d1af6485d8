import logging

import pytest

from conftest import FakeAudioStorage, FakeSpeechProvider
from saga_tts.services.speech_service import SpeechRequestHandler
from saga_tts.services.voice_policy import VoicePolicy, assign_voice
from saga_tts.shared.errors import MissingField, StorageFailed, SynthesisFailed

SKIP = r"^(player|you|pc)(\s*\d+)?$"


@pytest.fixture
def handler(registry, policy, provider, storage):
    return SpeechRequestHandler(registry, policy, provider, storage, skip_pattern=SKIP)


@pytest.mark.asyncio
async def test_handle_synthesizes_and_stores(handler, provider, storage, policy):
    result = await handler.handle("Bramblewick", "Welcome to the Gilded Goose!")

    expected_voice = assign_voice("Bramblewick", policy).voice
    assert result["voiceUsed"] == expected_voice
    assert result["character"] == "Bramblewick"
    assert provider.calls == [("Welcome to the Gilded Goose!", expected_voice)]

    (key, (data, content_type)), = storage.objects.items()
    assert key.startswith("tts_") and key.endswith("_Bramblewick.mp3")
    assert data == provider.audio
    assert content_type == "audio/mpeg"
    assert result["audioUrl"] == f"https://cdn.example.test/{key}"


@pytest.mark.asyncio
async def test_registry_voice_is_reused(handler, registry):
    first = await handler.handle("Bramblewick", "Another ale?")
    registry.assign("Someone Else", "echo")
    second = await handler.handle("bramblewick", "Coming right up.")

    assert second["voiceUsed"] == first["voiceUsed"]
    assert registry.lookup("Bramblewick") == first["voiceUsed"]


@pytest.mark.asyncio
async def test_existing_registry_entry_wins_over_policy(handler, registry):
    registry.assign("Garrick", "shimmer")
    result = await handler.handle("Garrick", "Halt!")
    assert result["voiceUsed"] == "shimmer"


@pytest.mark.asyncio
async def test_requested_voice_overrides_and_is_remembered(handler, registry):
    await handler.handle("Garrick", "Halt!")
    result = await handler.handle("Garrick", "Who goes there?", voice="ash")

    assert result["voiceUsed"] == "ash"
    assert registry.lookup("Garrick") == "ash"
    assert (await handler.handle("Garrick", "Pass."))["voiceUsed"] == "ash"


@pytest.mark.asyncio
async def test_narrator_gets_fixed_voice(handler):
    result = await handler.handle("SAGA", "The road winds north.")
    assert result["voiceUsed"] == "verse"


@pytest.mark.asyncio
@pytest.mark.parametrize("character", ["Player", "player 2", "You", "PC"])
async def test_player_characters_are_skipped(handler, provider, storage, registry, character):
    result = await handler.handle(character, "I open the door.")

    assert result == {"skipped": True, "character": character}
    assert provider.calls == []
    assert storage.objects == {}
    assert len(registry) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "character,text",
    [("Bramblewick", ""), ("Bramblewick", "   "), ("", "Hello"), (None, "Hello"), ("Bramblewick", None)],
)
async def test_missing_fields_make_no_calls(handler, provider, storage, registry, character, text):
    with pytest.raises(MissingField):
        await handler.handle(character, text)

    assert provider.calls == []
    assert storage.objects == {}
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_synthesis_failure_propagates(registry, policy, storage):
    handler = SpeechRequestHandler(registry, policy, FakeSpeechProvider(fail=True), storage)

    with pytest.raises(SynthesisFailed):
        await handler.handle("Bramblewick", "Hello")
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_empty_audio_is_synthesis_failure(registry, policy, storage):
    handler = SpeechRequestHandler(registry, policy, FakeSpeechProvider(audio=b""), storage)

    with pytest.raises(SynthesisFailed):
        await handler.handle("Bramblewick", "Hello")
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_storage_failure_propagates(registry, policy, provider):
    handler = SpeechRequestHandler(registry, policy, provider, FakeAudioStorage(fail=True))

    with pytest.raises(StorageFailed):
        await handler.handle("Bramblewick", "Hello")


def test_no_skip_pattern_skips_nothing(registry, policy, provider, storage):
    handler = SpeechRequestHandler(registry, policy, provider, storage)
    assert handler.should_skip("Player") is False


@pytest.fixture
def gender_handler(registry, provider, storage):
    gender_policy = VoicePolicy(
        mode="gender",
        pool=("fable",),
        gender_pools={"male": ("onyx", "ash"), "female": ("shimmer", "coral"), "neutral": ("alloy",)},
        narrator_voice="verse",
    )
    return SpeechRequestHandler(registry, gender_policy, provider, storage, skip_pattern=SKIP)


@pytest.mark.asyncio
async def test_description_selects_gender_pool(gender_handler):
    result = await gender_handler.handle("Lyra", "Hello there.", description="a young queen")

    expected = assign_voice("Lyra", gender_handler.policy, description="a young queen").voice
    assert result["voiceUsed"] == expected
    assert expected in ("shimmer", "coral")


@pytest.mark.asyncio
async def test_dialogue_text_is_classified_without_description(gender_handler):
    result = await gender_handler.handle("Osric", "Kneel before your king.")
    assert result["voiceUsed"] in ("onyx", "ash")


@pytest.mark.asyncio
async def test_no_keywords_fall_to_neutral_pool(gender_handler):
    result = await gender_handler.handle("Pip", "Beep boop.", description="a clockwork familiar")
    assert result["voiceUsed"] == "alloy"


@pytest.mark.asyncio
async def test_new_assignment_logs_category(gender_handler, caplog):
    with caplog.at_level(logging.INFO, logger="saga_tts.services.speech_service"):
        await gender_handler.handle("Lyra", "Hello there.", description="a young queen")
        await gender_handler.handle("Lyra", "Hello again.")

    messages = [r.getMessage() for r in caplog.records if r.name == "saga_tts.services.speech_service"]
    assert len(messages) == 1
    assert "category=female" in messages[0]
    assert "policy=gender" in messages[0]
