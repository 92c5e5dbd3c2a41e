"""
Service Dependencies.

Provides singleton instances of the clients and services used by the API
endpoints, built from the application settings on first use.
"""

from typing import Annotated, Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from chanchis.clients.etherscan import EtherscanApiClient
from chanchis.clients.storage import SupabaseStorageClient
from chanchis.clients.thirdweb import ThirdwebApiClient
from chanchis.core.chain.token import TokenReader
from chanchis.core.database import get_session
from chanchis.core.database.repositories import BusinessRepository
from chanchis.server.core.config import settings
from chanchis.server.services.cashback import CashbackCalculator
from chanchis.server.services.covers import CoverImageService
from chanchis.server.services.history import TransactionHistoryService
from chanchis.server.services.transfer import GaslessTransferService

_token_reader: Optional[TokenReader] = None
_thirdweb_client: Optional[ThirdwebApiClient] = None
_etherscan_client: Optional[EtherscanApiClient] = None
_storage_client: Optional[SupabaseStorageClient] = None


def get_token_reader() -> TokenReader:
    global _token_reader
    if _token_reader is None:
        celo = settings.celo
        _token_reader = TokenReader(
            celo.rpc_url,
            token_address=celo.token_address,
            decimals=celo.token_decimals,
            symbol=celo.token_symbol,
        )
    return _token_reader


def get_thirdweb_client() -> ThirdwebApiClient:
    global _thirdweb_client
    if _thirdweb_client is None:
        thirdweb = settings.thirdweb
        _thirdweb_client = ThirdwebApiClient(thirdweb.base_url, secret_key=thirdweb.secret_key)
    return _thirdweb_client


def get_etherscan_client() -> EtherscanApiClient:
    global _etherscan_client
    if _etherscan_client is None:
        etherscan = settings.etherscan
        _etherscan_client = EtherscanApiClient(etherscan.base_url, api_key=etherscan.api_key)
    return _etherscan_client


def get_storage_client() -> Optional[SupabaseStorageClient]:
    global _storage_client
    if _storage_client is None:
        supabase = settings.supabase
        if not supabase.url:
            return None
        _storage_client = SupabaseStorageClient(supabase.url, api_key=supabase.service_key)
    return _storage_client


async def close_clients() -> None:
    """Close the HTTP clients opened by the providers above."""
    global _thirdweb_client, _etherscan_client, _storage_client
    for client in (_thirdweb_client, _etherscan_client, _storage_client):
        if client is not None:
            await client.aclose()
    _thirdweb_client = _etherscan_client = _storage_client = None


def get_transfer_service(
    token: Annotated[TokenReader, Depends(get_token_reader)],
    relayer: Annotated[ThirdwebApiClient, Depends(get_thirdweb_client)],
) -> GaslessTransferService:
    return GaslessTransferService(
        token=token,
        relayer=relayer,
        relayer_config=settings.thirdweb,
        chain_config=settings.celo,
    )


def get_history_service(
    explorer: Annotated[EtherscanApiClient, Depends(get_etherscan_client)],
) -> TransactionHistoryService:
    return TransactionHistoryService(
        explorer=explorer,
        explorer_config=settings.etherscan,
        chain_config=settings.celo,
    )


def get_cover_service(
    storage: Annotated[Optional[SupabaseStorageClient], Depends(get_storage_client)],
) -> CoverImageService:
    return CoverImageService(
        storage=storage,
        bucket=settings.supabase.cover_bucket,
        max_bytes=settings.uploads.max_bytes,
    )


def get_cashback_calculator() -> CashbackCalculator:
    return CashbackCalculator(settings.cashback.chnc_price_usd)


def get_business_repository(session: Annotated[AsyncSession, Depends(get_session)]) -> BusinessRepository:
    return BusinessRepository(session)


TokenReaderDep = Annotated[TokenReader, Depends(get_token_reader)]
TransferServiceDep = Annotated[GaslessTransferService, Depends(get_transfer_service)]
HistoryServiceDep = Annotated[TransactionHistoryService, Depends(get_history_service)]
CoverServiceDep = Annotated[CoverImageService, Depends(get_cover_service)]
CashbackCalculatorDep = Annotated[CashbackCalculator, Depends(get_cashback_calculator)]
BusinessRepositoryDep = Annotated[BusinessRepository, Depends(get_business_repository)]
