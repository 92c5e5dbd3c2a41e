import httpx
import pytest
from eth_account import Account
from httpx import AsyncClient

from chanchis.core.chain.permit import build_permit_typed_data, sign_permit
from chanchis.server.core.config import ThirdwebConfig
from chanchis.server.main import app
from chanchis.server.services.deps import get_transfer_service

# Same addresses as the shared fixtures in the server conftest
TOKEN_ADDRESS = "0xd85e17185cc11a02c7a8c5055fe7cb6278df9418"
SPONSOR_ADDRESS = "0x1111111111111111111111111111111111111111"
RECIPIENT_ADDRESS = "0x2222222222222222222222222222222222222222"

pytestmark = pytest.mark.asyncio

DEADLINE = 1_800_000_000
AMOUNT = 5 * 10**18


def _sign(account, value=AMOUNT, deadline=DEADLINE, nonce=0) -> str:
    typed = build_permit_typed_data(
        account.address, SPONSOR_ADDRESS, value, nonce, deadline, token_address=TOKEN_ADDRESS
    )
    return sign_permit(account.key, typed)


def _body(account, **overrides):
    body = {
        "from": account.address,
        "to": RECIPIENT_ADDRESS,
        "amount": str(AMOUNT),
        "deadline": str(DEADLINE),
        "signature": _sign(account),
    }
    body.update(overrides)
    return body


class TestPermitNonce:
    async def test_returns_nonce_and_sponsor(self, client: AsyncClient, fake_token, owner_account):
        fake_token.nonces[owner_account.address.lower()] = 7

        response = await client.post("/api/v1/transfer/nonce", json={"owner": owner_account.address})

        assert response.status_code == 200
        assert response.json() == {"nonce": "7", "spender": SPONSOR_ADDRESS}

    async def test_missing_owner(self, client: AsyncClient):
        response = await client.post("/api/v1/transfer/nonce", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "Owner address required"

    async def test_invalid_owner(self, client: AsyncClient):
        response = await client.post("/api/v1/transfer/nonce", json={"owner": "0x1234"})
        assert response.status_code == 400
        assert response.json()["error_type"] == "InvalidAddressError"

    async def test_sponsor_not_configured(self, client: AsyncClient, make_transfer_service, owner_account):
        unconfigured = ThirdwebConfig(secret_key="test-secret", base_url="http://mock-thirdweb")
        app.dependency_overrides[get_transfer_service] = lambda: make_transfer_service(unconfigured)

        response = await client.post("/api/v1/transfer/nonce", json={"owner": owner_account.address})

        assert response.status_code == 500
        assert response.json()["detail"] == "Sponsor wallet not configured"

    async def test_malformed_sponsor_is_a_server_error(self, client: AsyncClient, make_transfer_service, owner_account):
        malformed = ThirdwebConfig(
            secret_key="test-secret", base_url="http://mock-thirdweb", sponsor_address="not-an-address"
        )
        app.dependency_overrides[get_transfer_service] = lambda: make_transfer_service(malformed)

        response = await client.post("/api/v1/transfer/nonce", json={"owner": owner_account.address})

        assert response.status_code == 500
        assert response.json() == {"detail": "Sponsor wallet not configured", "error_type": "ConfigurationError"}


class TestRelayTransfer:
    async def test_relays_permit_then_transfer(self, client: AsyncClient, relayer_handler, owner_account):
        response = await client.post("/api/v1/transfer", json=_body(owner_account))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "permitTxHash": f"0x{1:064x}",
            "transferTxHash": f"0x{2:064x}",
        }
        assert relayer_handler.methods == ["permit", "transferFrom"]
        transfer_params = relayer_handler.requests[1]["body"]["calls"][0]["params"]
        assert transfer_params == [owner_account.address, RECIPIENT_ADDRESS, str(AMOUNT)]

    async def test_missing_parameters(self, client: AsyncClient, relayer_handler, owner_account):
        body = _body(owner_account)
        del body["signature"]

        response = await client.post("/api/v1/transfer", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required parameters"
        assert relayer_handler.requests == []

    async def test_server_not_configured(self, client: AsyncClient, make_transfer_service, owner_account):
        unconfigured = ThirdwebConfig(base_url="http://mock-thirdweb", sponsor_address=SPONSOR_ADDRESS)
        app.dependency_overrides[get_transfer_service] = lambda: make_transfer_service(unconfigured)

        response = await client.post("/api/v1/transfer", json=_body(owner_account))

        assert response.status_code == 500
        assert response.json()["detail"] == "Server not configured properly"

    async def test_expired_deadline(self, client: AsyncClient, relayer_handler, owner_account):
        body = _body(owner_account, deadline="1600000000")

        response = await client.post("/api/v1/transfer", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Permit deadline has expired"
        assert relayer_handler.requests == []

    async def test_signature_from_other_wallet_is_rejected(self, client: AsyncClient, relayer_handler, owner_account):
        intruder = Account.create()
        body = _body(owner_account, signature=_sign(intruder))

        response = await client.post("/api/v1/transfer", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Permit signature does not match owner"
        assert relayer_handler.requests == []

    async def test_malformed_signature(self, client: AsyncClient, owner_account):
        response = await client.post("/api/v1/transfer", json=_body(owner_account, signature="0xdeadbeef"))
        assert response.status_code == 400
        assert response.json()["error_type"] == "InvalidPermitError"

    async def test_permit_failure_skips_transfer(self, client: AsyncClient, relayer_handler, owner_account):
        relayer_handler.responses.append(httpx.Response(400, json={"error": {"message": "execution reverted"}}))

        response = await client.post("/api/v1/transfer", json=_body(owner_account))

        assert response.status_code == 500
        assert response.json()["detail"] == "execution reverted"
        assert relayer_handler.methods == ["permit"]

    async def test_transfer_failure_after_permit(self, client: AsyncClient, relayer_handler, owner_account):
        relayer_handler.responses.extend(
            [
                httpx.Response(200, json={"transactionHash": "0xpermit"}),
                httpx.Response(500, json={"error": "insufficient allowance"}),
            ]
        )

        response = await client.post("/api/v1/transfer", json=_body(owner_account))

        assert response.status_code == 500
        assert response.json()["detail"] == "insufficient allowance"
        assert relayer_handler.methods == ["permit", "transferFrom"]
