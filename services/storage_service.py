"""
RecipeBox Object Storage Client
Uploads images to Supabase Storage and resolves their public URLs
"""

from typing import Optional
from urllib.parse import quote
import structlog
import httpx

from core.config import Settings

logger = structlog.get_logger()


class StorageError(Exception):
    """Raised when an object could not be stored"""
    pass


class StorageClient:
    """Client for the Supabase Storage REST API"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.SUPABASE_URL
        self.api_key = settings.SUPABASE_KEY
        self.client = httpx.AsyncClient(timeout=settings.STORAGE_TIMEOUT, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    def _headers(self, content_type: str) -> dict:
        headers = {
            "Content-Type": content_type or "application/octet-stream",
            "cache-control": "3600",
            "x-upsert": "false",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return headers

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{quote(path)}"

    async def upload(self, bucket: str, path: str, content: bytes, content_type: str) -> str:
        """Store ``content`` at ``bucket/path`` and return its public URL"""
        try:
            response = await self.client.post(
                f"{self.base_url}/storage/v1/object/{bucket}/{quote(path)}",
                content=content,
                headers=self._headers(content_type),
            )
            response.raise_for_status()

        except httpx.RequestError as e:
            logger.error("Storage request failed", bucket=bucket, path=path, error=str(e))
            raise StorageError(f"Failed to upload {path}: {e}") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                "Storage returned error",
                bucket=bucket,
                path=path,
                status=e.response.status_code,
                body=e.response.text[:500],
            )
            raise StorageError(f"Storage error: {e.response.status_code}") from e

        logger.info("Object uploaded", bucket=bucket, path=path, size=len(content))
        return self.public_url(bucket, path)
