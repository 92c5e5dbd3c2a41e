"""
API endpoints for the affiliated business directory.

Each wallet can register one business. Updates and deletes are only allowed
for the wallet that owns the business; wallets are compared in lowercase.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import IntegrityError

from chanchis.core.chain.addresses import normalize_address
from chanchis.core.database.entities.businesses import Business
from chanchis.core.logging_config import get_logger
from chanchis.core.models.io.businesses import (
    BusinessCreate,
    BusinessListResponse,
    BusinessLookupResponse,
    BusinessRead,
    BusinessResponse,
    BusinessUpdate,
    CashbackQuoteRead,
    DeleteResponse,
)
from chanchis.server.services.deps import BusinessRepositoryDep, CashbackCalculatorDep

logger = get_logger(__name__)

router = APIRouter(tags=["businesses"])


async def _get_or_404(repository: BusinessRepositoryDep, business_id: str) -> Business:
    business = await repository.get_by_id(business_id)
    if not business:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Business not found")
    return business


@router.get(
    "",
    response_model=None,
    summary="List or Look Up Businesses",
    description="List all businesses newest first, or with `wallet` return the business owned by that wallet.",
    responses={
        200: {"description": "`{businesses: [...]}` or, with `wallet`, `{business: object|null}`"},
        400: {"description": "Invalid wallet address"},
    },
)
async def list_businesses(
    repository: BusinessRepositoryDep,
    wallet: Optional[str] = None,
) -> Union[BusinessListResponse, BusinessLookupResponse]:
    if wallet:
        business = await repository.get_by_wallet(normalize_address(wallet, "wallet"))
        return BusinessLookupResponse(business=BusinessRead.model_validate(business) if business else None)

    businesses = await repository.list()
    return BusinessListResponse(businesses=[BusinessRead.model_validate(b) for b in businesses])


@router.post(
    "",
    response_model=BusinessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Business",
    responses={
        201: {"description": "Business created"},
        409: {"description": "The wallet already has a business"},
    },
)
async def create_business(payload: BusinessCreate, repository: BusinessRepositoryDep) -> BusinessResponse:
    """
    Register a business for a wallet.

    - **wallet_address**: Owner wallet; one business per wallet.
    - **cashback_percentage**: Cashback offered on purchases, 0-100.
    """
    if await repository.get_by_wallet(payload.wallet_address):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="This wallet already has a business registered")

    try:
        business = await repository.create(Business.model_validate(payload.model_dump()))
    except IntegrityError as e:
        await repository.session.rollback()
        logger.warning(f"Concurrent registration for {payload.wallet_address}: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="This wallet already has a business registered"
        ) from e

    logger.info(f"Registered business {business.id} for {business.wallet_address}")
    return BusinessResponse(business=BusinessRead.model_validate(business))


@router.get(
    "/{business_id}",
    response_model=BusinessResponse,
    summary="Get Business",
    responses={404: {"description": "Business not found"}},
)
async def get_business(business_id: str, repository: BusinessRepositoryDep) -> BusinessResponse:
    business = await _get_or_404(repository, business_id)
    return BusinessResponse(business=BusinessRead.model_validate(business))


@router.put(
    "/{business_id}",
    response_model=BusinessResponse,
    summary="Update Business",
    description="Update the provided fields of a business. Only the owning wallet may update it.",
    responses={
        403: {"description": "Caller does not own the business"},
        404: {"description": "Business not found"},
    },
)
async def update_business(
    business_id: str, payload: BusinessUpdate, repository: BusinessRepositoryDep
) -> BusinessResponse:
    business = await _get_or_404(repository, business_id)
    if not business.is_owned_by(payload.wallet_address):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own business")

    business = await repository.apply_update(business, payload.changes())
    logger.info(f"Updated business {business.id}")
    return BusinessResponse(business=BusinessRead.model_validate(business))


@router.delete(
    "/{business_id}",
    response_model=DeleteResponse,
    summary="Delete Business",
    responses={
        400: {"description": "Wallet missing"},
        403: {"description": "Caller does not own the business"},
        404: {"description": "Business not found"},
    },
)
async def delete_business(
    business_id: str, repository: BusinessRepositoryDep, wallet: Optional[str] = None
) -> DeleteResponse:
    if not wallet:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Wallet address required")
    business = await _get_or_404(repository, business_id)
    if not business.is_owned_by(wallet):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own business")

    await repository.delete(business.id)
    logger.info(f"Deleted business {business_id}")
    return DeleteResponse(success=True)


@router.get(
    "/{business_id}/cashback",
    response_model=CashbackQuoteRead,
    summary="Quote Cashback",
    description="Cashback owed by the business for a purchase, in USD and in CHNC at the reference price.",
    responses={
        400: {"description": "Negative purchase amount"},
        404: {"description": "Business not found"},
    },
)
async def quote_cashback(
    business_id: str,
    purchase_usd: Decimal,
    repository: BusinessRepositoryDep,
    calculator: CashbackCalculatorDep,
) -> CashbackQuoteRead:
    business = await _get_or_404(repository, business_id)
    quote = calculator.quote(purchase_usd, business.cashback_percentage)
    return CashbackQuoteRead(
        business_id=business.id,
        cashback_percentage=business.cashback_percentage,
        purchase_usd=quote.purchase_usd,
        cashback_usd=quote.cashback_usd,
        chnc_price_usd=quote.chnc_price_usd,
        chnc_amount=quote.chnc_amount,
    )
