from pydantic import BaseModel
from typing import Any, Optional

class SynthesizeRequest(BaseModel):
    # Presence is checked by the handler so a missing field reports MissingField, not a 422
    character: Optional[str] = None
    text: Optional[str] = None
    voice: Optional[str] = None
    description: Optional[str] = None

class ImportVoicesRequest(BaseModel):
    voices: Any = None
