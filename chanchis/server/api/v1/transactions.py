"""
Transaction History Endpoints.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from chanchis.clients.etherscan import EtherscanApiError
from chanchis.core.chain.addresses import to_checksum
from chanchis.core.logging_config import get_logger
from chanchis.core.models.io.wallet import TransactionListResponse
from chanchis.server.services.deps import HistoryServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["transactions"])


@router.get(
    "",
    response_model=TransactionListResponse,
    summary="List CHNC Transfers",
    description="Most recent CHNC transfers sent or received by an address, newest first.",
    responses={
        400: {"description": "Address missing or invalid"},
        500: {"description": "Explorer not configured or unreachable"},
    },
)
async def list_transactions(service: HistoryServiceDep, address: Optional[str] = None) -> TransactionListResponse:
    """
    List CHNC transfers of an address.

    Each transfer is labelled ``in`` when the address received it and ``out``
    otherwise.
    """
    if not address:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Address parameter required")
    account = to_checksum(address, "address")
    try:
        transactions = await service.list_transfers(account)
    except EtherscanApiError as e:
        logger.error(f"Error fetching transactions for {account}: {e.message}", extra={"details": e.details})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch transactions"
        ) from e
    return TransactionListResponse(transactions=transactions)
