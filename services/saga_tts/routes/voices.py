from fastapi import APIRouter, Depends

from ..services.speech_service import SpeechRequestHandler
from ..services.voice_registry import VoiceRegistry
from ..shared.schemas.request import ImportVoicesRequest
from ..shared.schemas.response import (
    ErrorResponse,
    ImportVoicesResponse,
    VoicePoolResponse,
    VoicesResponse,
)
from .deps import get_speech_handler, get_voice_registry

router = APIRouter()


@router.get("", response_model=VoicesResponse)
async def export_voices(registry: VoiceRegistry = Depends(get_voice_registry)):
    """Current character -> voice mapping, for the client to save"""
    return {"voices": registry.export_all()}


@router.post("/import", response_model=ImportVoicesResponse, responses={400: {"model": ErrorResponse}})
async def import_voices(
    request: ImportVoicesRequest,
    registry: VoiceRegistry = Depends(get_voice_registry),
):
    """Merge a previously exported mapping into the registry"""
    merged = registry.import_all(request.voices)
    return {"message": "Voices imported successfully", "voices": merged}


@router.get("/pool", response_model=VoicePoolResponse)
async def voice_pool(handler: SpeechRequestHandler = Depends(get_speech_handler)):
    policy = handler.policy
    return {
        "mode": policy.mode,
        "pool": list(policy.pool),
        "genderPools": {category: list(pool) for category, pool in policy.gender_pools.items()},
        "narratorNames": list(policy.narrator_names),
        "narratorVoice": policy.narrator_voice or "",
    }
