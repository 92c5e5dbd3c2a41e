"""
Cover Image Service.

Stores business cover images in the public cover bucket and returns the
public URL. Object names are ``<wallet lowercase>-<epoch ms>.<ext>`` so a
wallet's uploads never collide with each other or with other wallets.
"""

from __future__ import annotations

import mimetypes
import time
from typing import Callable, Optional

from chanchis.clients.storage import StorageApiError, SupabaseStorageClient
from chanchis.core.errors import ChanchisError, ConfigurationError
from chanchis.core.logging_config import get_logger

logger = get_logger(__name__)


class InvalidUploadError(ChanchisError):
    status_code = 400


class UploadTooLargeError(ChanchisError):
    status_code = 413


class CoverUploadError(ChanchisError):
    status_code = 500


def cover_object_name(wallet_address: str, filename: Optional[str], content_type: Optional[str], now_ms: int) -> str:
    """Build the storage object name for a cover upload."""
    ext = None
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].lower()
    if not ext and content_type:
        guessed = mimetypes.guess_extension(content_type)
        ext = guessed.lstrip(".") if guessed else None
    return f"{wallet_address.lower()}-{now_ms}.{ext or 'bin'}"


class CoverImageService:
    def __init__(
        self,
        *,
        storage: Optional[SupabaseStorageClient],
        bucket: str,
        max_bytes: int,
        clock_ms: Callable[[], int] = lambda: int(time.time() * 1000),
    ) -> None:
        self.storage = storage
        self.bucket = bucket
        self.max_bytes = max_bytes
        self._clock_ms = clock_ms

    def check_size(self, size: Optional[int]) -> None:
        """Reject an upload whose size is known to exceed ``max_bytes``."""
        if size is not None and size > self.max_bytes:
            raise UploadTooLargeError(f"File exceeds the {self.max_bytes} byte limit")

    async def upload(
        self, *, wallet_address: str, filename: Optional[str], content_type: Optional[str], content: bytes
    ) -> str:
        """Upload a cover image and return its public URL.

        Raises:
            ConfigurationError: If storage is not configured.
            InvalidUploadError: If the file is not an image or is empty.
            UploadTooLargeError: If the file exceeds ``max_bytes``.
            CoverUploadError: If the storage API rejects the upload.
        """
        if self.storage is None:
            raise ConfigurationError("Storage not configured")
        if not content_type or not content_type.startswith("image/"):
            raise InvalidUploadError("Only image files can be uploaded")
        if not content:
            raise InvalidUploadError("Uploaded file is empty")
        self.check_size(len(content))

        name = cover_object_name(wallet_address, filename, content_type, self._clock_ms())
        try:
            await self.storage.upload(self.bucket, name, content, content_type=content_type, upsert=True)
        except StorageApiError as e:
            logger.error(f"Upload error for {name}: {e.message}", extra={"details": e.details})
            raise CoverUploadError(e.message, details=e.details) from e

        url = self.storage.public_url(self.bucket, name)
        logger.info(f"Stored cover image {name}")
        return url
