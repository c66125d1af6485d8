import os
from functools import lru_cache
from pathlib import Path
from dotenv import load_dotenv


services_dir = Path(__file__).parent.parent.parent
env_path = services_dir / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    # Try loading from current directory or parent directories
    load_dotenv()


def _split(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    def __init__(self):
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        # Comma-separated list of allowed origins for CORS, "*" keeps the relay open
        self.allowed_origins = _split(os.getenv("ALLOWED_ORIGINS", "*"))

        # Speech provider
        self.tts_provider = os.getenv("TTS_PROVIDER", "openai").strip().lower()
        self.openai_api_key = os.getenv("OPENAI_API_KEY")
        self.openai_tts_model = os.getenv("OPENAI_TTS_MODEL", "gpt-4o-mini-tts")
        self.deepgram_api_key = os.getenv("DEEPGRAM_API_KEY")

        # Voice assignment
        self.voice_policy = os.getenv("VOICE_POLICY", "hash").strip().lower()
        self.voice_pool = _split(os.getenv("VOICE_POOL"))
        self.voice_pool_male = _split(os.getenv("VOICE_POOL_MALE"))
        self.voice_pool_female = _split(os.getenv("VOICE_POOL_FEMALE"))
        self.voice_pool_neutral = _split(os.getenv("VOICE_POOL_NEUTRAL"))
        self.narrator_names = [n.lower() for n in _split(os.getenv("NARRATOR_NAMES", "saga,narrator"))]
        self.narrator_voice = os.getenv("NARRATOR_VOICE")
        self.skip_character_pattern = os.getenv(
            "SKIP_CHARACTER_PATTERN", r"^(player|you|pc)(\s*\d+)?$"
        )

        # Audio storage (S3 compatible, Cloudflare R2 by default)
        self.storage_backend = os.getenv("STORAGE_BACKEND", "s3").strip().lower()
        self.r2_account_id = os.getenv("R2_ACCOUNT_ID")
        self.storage_bucket = os.getenv("STORAGE_BUCKET") or os.getenv("R2_BUCKET_NAME")
        self.storage_access_key_id = os.getenv("STORAGE_ACCESS_KEY_ID") or os.getenv("R2_ACCESS_KEY_ID")
        self.storage_secret_access_key = (
            os.getenv("STORAGE_SECRET_ACCESS_KEY") or os.getenv("R2_SECRET_ACCESS_KEY")
        )
        self.storage_region = os.getenv("STORAGE_REGION", "auto")
        self.storage_public_base_url = os.getenv("STORAGE_PUBLIC_BASE_URL")
        endpoint = os.getenv("STORAGE_ENDPOINT_URL")
        if not endpoint and self.r2_account_id:
            endpoint = f"https://{self.r2_account_id}.r2.cloudflarestorage.com"
        self.storage_endpoint_url = endpoint


@lru_cache()
def get_settings():
    return Settings()
