"""
Object Storage Client
Uploads and removes objects through the storage REST API and builds public URLs
"""

import httpx
import logging
from typing import Optional, Dict
from urllib.parse import quote

from config import settings

logger = logging.getLogger(__name__)


class StorageClient:
    """Client for a bucket in a Supabase Storage-compatible REST API"""

    def __init__(
        self,
        base_url: str,
        bucket: str,
        service_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize storage client

        Args:
            base_url: Storage server root, e.g. https://project.supabase.co
            bucket: Bucket every object path is relative to
            service_key: Service role key sent as bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip('/')
        self.bucket = bucket
        self.service_key = service_key
        self.timeout = timeout
        self.transport = transport

    def get_headers(self, content_type: Optional[str] = None) -> Dict[str, str]:
        headers = {}
        if self.service_key:
            headers['Authorization'] = f"Bearer {self.service_key}"
            headers['apikey'] = self.service_key
        if content_type:
            headers['Content-Type'] = content_type
        return headers

    def object_url(self, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{quote(path)}"

    def public_url(self, path: str) -> str:
        """Stable public retrieval URL for an object path"""
        return f"{self.base_url}/storage/v1/object/public/{self.bucket}/{quote(path)}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport, timeout=self.timeout)

    async def upload(self, path: str, content: bytes, content_type: str) -> str:
        """
        Store an object; an existing object at the same path is never overwritten

        Args:
            path: Object path inside the bucket
            content: Raw bytes
            content_type: MIME type stored with the object

        Returns:
            The object path

        Raises:
            httpx.HTTPError: If request fails or storage rejects the write
        """
        url = self.object_url(path)
        headers = self.get_headers(content_type)
        headers['x-upsert'] = 'false'

        try:
            logger.info(f"🔄 Storage upload: {self.bucket}/{path} ({len(content)} bytes)")

            async with self._client() as client:
                response = await client.post(url, headers=headers, content=content)
                response.raise_for_status()

            logger.info(f"✅ Storage upload success: {self.bucket}/{path}")
            return path

        except httpx.HTTPError as e:
            logger.error(f"❌ Storage upload failed: {self.bucket}/{path} - {str(e)}")
            raise

    async def delete(self, path: str) -> None:
        """
        Remove an object

        Raises:
            httpx.HTTPError: If request fails
        """
        try:
            logger.info(f"🔄 Storage delete: {self.bucket}/{path}")

            async with self._client() as client:
                response = await client.delete(self.object_url(path), headers=self.get_headers())
                response.raise_for_status()

            logger.info(f"✅ Storage delete success: {self.bucket}/{path}")

        except httpx.HTTPError as e:
            logger.error(f"❌ Storage delete failed: {self.bucket}/{path} - {str(e)}")
            raise


def get_storage_client() -> StorageClient:
    """FastAPI dependency; tests override it with a mock transport"""
    return StorageClient(
        base_url=settings.STORAGE_URL,
        bucket=settings.STORAGE_BUCKET,
        service_key=settings.STORAGE_SERVICE_KEY,
        timeout=settings.STORAGE_TIMEOUT,
    )
