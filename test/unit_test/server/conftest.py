import os
from typing import AsyncGenerator, Callable, List

import httpx
import pytest
import pytest_asyncio
from eth_account import Account
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.pool import StaticPool

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Set test database URL before importing app
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

TOKEN_ADDRESS = "0xd85e17185cc11a02c7a8c5055fe7cb6278df9418"
SPONSOR_ADDRESS = "0x1111111111111111111111111111111111111111"
RECIPIENT_ADDRESS = "0x2222222222222222222222222222222222222222"


class FakeTokenReader:
    """Stand-in for ``TokenReader`` answering from in-memory maps."""

    def __init__(self, nonces=None, balances=None, decimals: int = 18, symbol: str = "CHNC"):
        self.nonces = {k.lower(): v for k, v in (nonces or {}).items()}
        self.balances = {k.lower(): v for k, v in (balances or {}).items()}
        self.decimals = decimals
        self.symbol = symbol
        self.nonce_calls: List[str] = []

    async def get_nonce(self, owner: str) -> int:
        from chanchis.core.chain.addresses import to_checksum

        owner_cs = to_checksum(owner, "owner")
        self.nonce_calls.append(owner_cs)
        return self.nonces.get(owner_cs.lower(), 0)

    async def get_balance(self, account: str):
        from chanchis.core.chain.addresses import to_checksum
        from chanchis.core.chain.token import TokenBalance

        account_cs = to_checksum(account, "address")
        return TokenBalance(
            address=account_cs,
            raw=self.balances.get(account_cs.lower(), 0),
            decimals=self.decimals,
            symbol=self.symbol,
        )


class RecordingRelayer:
    """``httpx.MockTransport`` handler for the relayer that records each write."""

    def __init__(self, responses=None):
        self.requests: List[dict] = []
        self.responses = list(responses or [])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        import json

        body = json.loads(request.content)
        self.requests.append({"headers": dict(request.headers), "body": body, "path": request.url.path})
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json={"transactionHash": f"0x{len(self.requests):064x}"})

    @property
    def methods(self) -> List[str]:
        return [r["body"]["calls"][0]["method"].split("(")[0].split()[-1] for r in self.requests]


@pytest.fixture
def owner_account():
    return Account.create()


@pytest.fixture
def fake_token() -> FakeTokenReader:
    return FakeTokenReader()


@pytest.fixture
def relayer_handler() -> RecordingRelayer:
    return RecordingRelayer()


@pytest.fixture
def chain_config():
    from chanchis.server.core.config import CeloConfig

    return CeloConfig(token_address=TOKEN_ADDRESS)


@pytest.fixture
def relayer_config():
    from chanchis.server.core.config import ThirdwebConfig

    return ThirdwebConfig(
        secret_key="test-secret",
        base_url="http://mock-thirdweb",
        sponsor_address=SPONSOR_ADDRESS,
        verify_permit_signature=True,
    )


@pytest.fixture
def make_transfer_service(fake_token, relayer_handler, chain_config, relayer_config) -> Callable:
    """Factory building a ``GaslessTransferService`` over the fakes; keyword args override configs."""
    from chanchis.clients.thirdweb import ThirdwebApiClient
    from chanchis.server.services.transfer import GaslessTransferService

    def _make(relayer_cfg=None, clock=lambda: 1_700_000_000.0):
        cfg = relayer_cfg or relayer_config
        relayer = ThirdwebApiClient(
            cfg.base_url,
            secret_key=cfg.secret_key,
            client=httpx.AsyncClient(transport=httpx.MockTransport(relayer_handler)),
        )
        return GaslessTransferService(
            token=fake_token,
            relayer=relayer,
            relayer_config=cfg,
            chain_config=chain_config,
            clock=clock,
        )

    return _make


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database engine per test."""
    from chanchis.core.database.utils import create_all

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session_maker() as session:  # type: ignore[attr-defined]
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, fake_token, make_transfer_service) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies."""
    from chanchis.core.database import get_session
    from chanchis.server.main import app
    from chanchis.server.services.deps import get_token_reader, get_transfer_service

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_token_reader] = lambda: fake_token
    app.dependency_overrides[get_transfer_service] = lambda: make_transfer_service()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
