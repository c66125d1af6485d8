import asyncio
import base64
import logging
import re
import time
from typing import Optional, Protocol
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.config import Settings, get_settings
from ..shared.errors import ConfigurationError, StorageFailed

logger = logging.getLogger(__name__)


class AudioStorage(Protocol):
    """Persists audio bytes and returns a URL the client can play"""

    async def store(self, data: bytes, key: str, content_type: str) -> str:
        ...


def build_audio_key(character: str, extension: str = "mp3", now: Optional[float] = None) -> str:
    """Object key like ``tts_1712345678901_Old_Tom.mp3``"""
    millis = int((time.time() if now is None else now) * 1000)
    safe_name = re.sub(r"\s+", "_", character.strip())
    return f"tts_{millis}_{safe_name}.{extension}"


class S3AudioStorage:
    """Uploads audio as public-read objects to an S3 compatible bucket (Cloudflare R2)"""

    def __init__(
        self,
        bucket: Optional[str],
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: str = "auto",
        public_base_url: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.region = region
        self.public_base_url = public_base_url
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                region_name=self.region,
            )
        return self._client

    def public_url(self, key: str) -> str:
        # Character names may carry "?", "#" or "%"; the key is a path segment
        path = quote(key, safe="")
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{path}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{path}"
        return f"https://{self.bucket}.s3.amazonaws.com/{path}"

    async def store(self, data: bytes, key: str, content_type: str) -> str:
        if not self.bucket:
            raise ConfigurationError("STORAGE_BUCKET (or R2_BUCKET_NAME) environment variable is required")

        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Upload of %s to bucket %s failed: %s", key, self.bucket, exc)
            raise StorageFailed(f"Audio upload failed: {exc}") from exc

        url = self.public_url(key)
        logger.info("Stored %d bytes of audio at %s", len(data), url)
        return url


class InlineAudioStorage:
    """Returns the audio itself as a base64 data URL; nothing is uploaded"""

    async def store(self, data: bytes, key: str, content_type: str) -> str:
        encoded = base64.b64encode(data).decode("ascii")
        return f"data:{content_type};base64,{encoded}"


def create_audio_storage(settings: Optional[Settings] = None) -> AudioStorage:
    """Build the storage backend named by STORAGE_BACKEND"""
    settings = settings or get_settings()
    if settings.storage_backend == "s3":
        return S3AudioStorage(
            bucket=settings.storage_bucket,
            endpoint_url=settings.storage_endpoint_url,
            access_key_id=settings.storage_access_key_id,
            secret_access_key=settings.storage_secret_access_key,
            region=settings.storage_region,
            public_base_url=settings.storage_public_base_url,
        )
    if settings.storage_backend == "inline":
        return InlineAudioStorage()
    raise ConfigurationError(f"Unknown STORAGE_BACKEND '{settings.storage_backend}'")
