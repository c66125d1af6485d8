from typing import Union

from fastapi import APIRouter, Depends

from ..services.speech_service import SpeechRequestHandler
from ..shared.schemas.request import SynthesizeRequest
from ..shared.schemas.response import ErrorResponse, SkippedResponse, SynthesizeResponse
from .deps import get_speech_handler

router = APIRouter()


@router.post(
    "",
    response_model=Union[SynthesizeResponse, SkippedResponse],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def synthesize_line(
    request: SynthesizeRequest,
    handler: SpeechRequestHandler = Depends(get_speech_handler),
):
    """Generate TTS audio for a character line and return its URL"""
    return await handler.handle(
        request.character,
        request.text,
        voice=request.voice,
        description=request.description,
    )
