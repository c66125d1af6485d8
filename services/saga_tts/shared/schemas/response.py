from pydantic import BaseModel
from typing import Dict, List

class SynthesizeResponse(BaseModel):
    audioUrl: str
    voiceUsed: str
    character: str

class SkippedResponse(BaseModel):
    skipped: bool = True
    character: str

class VoicesResponse(BaseModel):
    voices: Dict[str, str]

class ImportVoicesResponse(BaseModel):
    message: str
    voices: Dict[str, str]

class VoicePoolResponse(BaseModel):
    mode: str
    pool: List[str]
    genderPools: Dict[str, List[str]]
    narratorNames: List[str]
    narratorVoice: str

class ErrorResponse(BaseModel):
    error: str
