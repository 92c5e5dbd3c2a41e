from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from .errors import StorageApiError


class SupabaseStorageClient:
    """
    Thin async HTTP client for the Supabase Storage REST API.

    Responsibilities:
    - upload: put an object into a bucket (optionally overwriting)
    - public_url: URL of an object in a public bucket
    """

    def __init__(
        self,
        project_url: str,
        *,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.project_url = project_url.rstrip("/")
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self, content_type: str, upsert: bool) -> dict[str, str]:
        headers: dict[str, str] = {
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
            headers["apikey"] = self.api_key
        return headers

    def _object_path(self, bucket: str, path: str) -> str:
        return f"{quote(bucket)}/{quote(path.lstrip('/'))}"

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        *,
        content_type: str = "application/octet-stream",
        upsert: bool = True,
    ) -> str:
        """Upload ``content`` to ``bucket/path`` and return the stored object key."""
        url = f"{self.project_url}/storage/v1/object/{self._object_path(bucket, path)}"
        self._logger.debug("SupabaseStorageClient.upload: POST %s bytes=%d", url, len(content))
        try:
            r = await self._client.post(url, headers=self._headers(content_type, upsert), content=content)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            details = _decode_body(e.response)
            message = details.get("message") if isinstance(details, dict) else None
            raise StorageApiError(
                message or f"Storage upload failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=details,
            ) from e
        except httpx.HTTPError as e:
            raise StorageApiError(f"Storage upload request failed: {e}") from e

        data = _decode_body(r)
        key = data.get("Key") if isinstance(data, dict) else None
        return key or f"{bucket}/{path}"

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.project_url}/storage/v1/object/public/{self._object_path(bucket, path)}"

    async def aclose(self) -> None:
        await self._client.aclose()


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
