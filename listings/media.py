import asyncio
import logging
import time
from typing import List, Optional

import httpx

from shared_utils.storage_client import StorageClient
from .errors import UploadError
from .schema import Attachment

logger = logging.getLogger(__name__)

SERVICES_FOLDER = "services"
RECEIPTS_FOLDER = "receipts"


class MediaUploader:
    """Stores listing images and receipts and hands back their public URLs"""

    def __init__(self, storage: StorageClient, owner_id: str, timestamp_ms: Optional[int] = None):
        self.storage = storage
        self.owner_id = owner_id
        # One timestamp per submission; the index keeps names unique within it
        self.timestamp_ms = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
        self.stored_paths: List[str] = []

    def object_path(self, folder: str, suffix: str, extension: str) -> str:
        return f"{folder}/{self.owner_id}/{self.timestamp_ms}_{suffix}.{extension}"

    async def upload(self, attachment: Attachment, folder: str, suffix: str) -> str:
        path = self.object_path(folder, suffix, attachment.extension)
        try:
            await self.storage.upload(path, attachment.content, attachment.content_type)
        except httpx.HTTPStatusError as e:
            raise UploadError(
                f"Failed to upload {attachment.filename}: storage responded {e.response.status_code}",
                step="upload_media"
            ) from e
        except httpx.HTTPError as e:
            raise UploadError(f"Failed to upload {attachment.filename}: {e}", step="upload_media") from e

        self.stored_paths.append(path)
        return self.storage.public_url(path)

    async def upload_images(self, images: List[Attachment]) -> List[str]:
        """
        Upload all images concurrently; URLs come back in attachment order.
        If any upload fails, the first error is raised after every upload settled,
        so `stored_paths` lists exactly what landed in storage.
        """
        results = await asyncio.gather(
            *(self.upload(image, SERVICES_FOLDER, str(index)) for index, image in enumerate(images)),
            return_exceptions=True
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def upload_receipt(self, receipt: Optional[Attachment]) -> Optional[str]:
        if receipt is None:
            return None
        return await self.upload(receipt, RECEIPTS_FOLDER, "receipt")

    async def remove_stored(self):
        """Delete everything this uploader stored; raises if any object is left behind"""
        leftover = []
        for path in list(self.stored_paths):
            try:
                await self.storage.delete(path)
                self.stored_paths.remove(path)
            except httpx.HTTPError:
                leftover.append(path)
        if leftover:
            logger.error(
                f"Orphaned media objects need manual cleanup: {leftover}",
                extra={"extra_data": {"owner_id": self.owner_id, "paths": leftover}}
            )
            raise UploadError(f"Could not remove {len(leftover)} uploaded object(s)", step="compensate_media")
