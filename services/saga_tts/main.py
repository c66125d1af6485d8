"""FastAPI application for the Saga TTS relay"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes import tts, voices
from .services.speech_service import SpeechRequestHandler
from .services.storage_service import AudioStorage, create_audio_storage
from .services.tts_service import SpeechProvider, create_speech_provider
from .services.voice_policy import VoicePolicy
from .services.voice_registry import VoiceRegistry
from .shared.config import Settings, get_settings
from .shared.errors import VoiceRelayError

logger = logging.getLogger(__name__)

SERVICE_NAME = "Saga TTS API"
VERSION = "1.0.0"


async def relay_error_handler(request: Request, exc: VoiceRelayError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    else:
        logger.info("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": f"Invalid request: {exc.errors()}"}, status_code=400)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[VoiceRegistry] = None,
    provider: Optional[SpeechProvider] = None,
    storage: Optional[AudioStorage] = None,
    policy: Optional[VoicePolicy] = None,
) -> FastAPI:
    """Build the app; collaborators default to the ones named in settings"""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=SERVICE_NAME,
        description="Character dialogue to speech relay with per-character voice memory",
        version=VERSION,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials="*" not in settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(VoiceRelayError, relay_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.state.voice_registry = registry if registry is not None else VoiceRegistry()
    app.state.speech_handler = SpeechRequestHandler(
        registry=app.state.voice_registry,
        policy=policy or VoicePolicy.from_settings(settings),
        provider=provider or create_speech_provider(settings),
        storage=storage or create_audio_storage(settings),
        skip_pattern=settings.skip_character_pattern,
    )

    app.include_router(
        tts.router,
        prefix="/tts",
        tags=["tts"]
    )

    app.include_router(
        voices.router,
        prefix="/voices",
        tags=["voices"]
    )

    @app.get("/")
    async def root():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": VERSION,
            "endpoints": ["POST /tts", "GET /voices", "POST /voices/import", "GET /voices/pool"],
        }

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


app = create_app()
