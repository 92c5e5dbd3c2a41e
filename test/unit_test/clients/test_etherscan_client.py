from __future__ import annotations

import httpx
import pytest

from chanchis.clients.etherscan import EtherscanApiClient, EtherscanApiError

pytestmark = pytest.mark.asyncio

TRANSFER = {
    "blockNumber": "1",
    "hash": "0xhash",
    "from": "0xfrom",
    "to": "0xto",
    "value": "1000",
    "tokenSymbol": "CHNC",
    "tokenDecimal": "18",
    "timeStamp": "1700000000",
}


def _client(handler, api_key: str | None = "key") -> EtherscanApiClient:
    return EtherscanApiClient(
        "http://mock-etherscan/v2/api",
        api_key=api_key,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


async def _get(client: EtherscanApiClient):
    return await client.get_token_transfers(address="0xme", contract_address="0xtoken", chain_id=42220)


async def test_query_params_and_parsing() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"status": "1", "message": "OK", "result": [TRANSFER]})

    transfers = await _get(_client(handler))

    params = captured[0].url.params
    assert captured[0].url.path == "/v2/api"
    assert params["chainid"] == "42220"
    assert params["module"] == "account"
    assert params["action"] == "tokentx"
    assert params["contractaddress"] == "0xtoken"
    assert params["address"] == "0xme"
    assert params["page"] == "1"
    assert params["offset"] == "50"
    assert params["sort"] == "desc"
    assert params["apikey"] == "key"

    assert len(transfers) == 1
    assert transfers[0].from_address == "0xfrom"
    assert transfers[0].to_address == "0xto"
    assert transfers[0].time_stamp == "1700000000"


async def test_api_key_is_optional() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"status": "1", "message": "OK", "result": []})

    await _get(_client(handler, api_key=None))
    assert "apikey" not in captured[0].url.params


@pytest.mark.parametrize(
    "payload",
    [
        {"status": "0", "message": "No transactions found", "result": []},
        {"status": "0", "message": "NOTOK", "result": "Invalid API Key"},
        {"status": "1", "message": "OK", "result": None},
    ],
)
async def test_non_success_payloads_are_empty(payload) -> None:
    assert await _get(_client(lambda request: httpx.Response(200, json=payload))) == []


async def test_http_error() -> None:
    with pytest.raises(EtherscanApiError) as exc_info:
        await _get(_client(lambda request: httpx.Response(429, text="rate limited")))
    assert exc_info.value.status_code == 429


async def test_invalid_json() -> None:
    with pytest.raises(EtherscanApiError):
        await _get(_client(lambda request: httpx.Response(200, text="<html>")))


async def test_malformed_transfer_row() -> None:
    row = {k: v for k, v in TRANSFER.items() if k not in ("to", "timeStamp")}
    payload = {"status": "1", "message": "OK", "result": [row]}

    with pytest.raises(EtherscanApiError) as exc_info:
        await _get(_client(lambda request: httpx.Response(200, json=payload)))
    assert exc_info.value.status_code == 200
