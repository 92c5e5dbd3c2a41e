from __future__ import annotations

import httpx
import pytest

from chanchis.clients.storage import StorageApiError, SupabaseStorageClient

def _client(handler) -> SupabaseStorageClient:
    return SupabaseStorageClient(
        "http://mock-supabase/",
        api_key="service-key",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_upload_sends_object_with_headers() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"Key": "business-covers/a.png"})

    key = await _client(handler).upload("business-covers", "a.png", b"img", content_type="image/png")

    assert key == "business-covers/a.png"
    request = captured[0]
    assert request.method == "POST"
    assert str(request.url) == "http://mock-supabase/storage/v1/object/business-covers/a.png"
    assert request.headers["authorization"] == "Bearer service-key"
    assert request.headers["apikey"] == "service-key"
    assert request.headers["x-upsert"] == "true"
    assert request.headers["content-type"] == "image/png"
    assert request.content == b"img"


@pytest.mark.asyncio
async def test_upload_without_upsert() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={})

    key = await _client(handler).upload("bucket", "b.png", b"x", upsert=False)

    assert key == "bucket/b.png"
    assert captured[0].headers["x-upsert"] == "false"


@pytest.mark.asyncio
async def test_upload_error() -> None:
    client = _client(lambda request: httpx.Response(403, json={"message": "new row violates row-level security policy"}))

    with pytest.raises(StorageApiError) as exc_info:
        await client.upload("bucket", "c.png", b"x")

    assert exc_info.value.status_code == 403
    assert "row-level security" in exc_info.value.message


def test_public_url() -> None:
    client = SupabaseStorageClient("http://mock-supabase", client=httpx.AsyncClient())
    assert client.public_url("business-covers", "a b.png") == (
        "http://mock-supabase/storage/v1/object/public/business-covers/a%20b.png"
    )
