"""
Wallet Endpoints.

Read-only CHNC balance lookup.
"""

from fastapi import APIRouter

from chanchis.core.models.io.wallet import BalanceRead
from chanchis.server.services.deps import TokenReaderDep

router = APIRouter(tags=["wallet"])


@router.get(
    "/{address}/balance",
    response_model=BalanceRead,
    summary="Get CHNC Balance",
    responses={400: {"description": "Invalid address"}},
)
async def get_balance(address: str, token: TokenReaderDep) -> BalanceRead:
    """Return the CHNC balance of ``address`` in base units and whole tokens."""
    balance = await token.get_balance(address)
    return BalanceRead(
        address=balance.address,
        symbol=balance.symbol,
        decimals=balance.decimals,
        raw=str(balance.raw),
        formatted=balance.formatted,
    )
