"""
Gasless Transfer Endpoints.

The mini-app first asks for the owner's permit nonce and the sponsor to
authorise, has the user sign an EIP-2612 permit, then posts the signed
permit here to be relayed by the sponsor wallet.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from chanchis.core.logging_config import get_logger
from chanchis.core.models.io.transfers import (
    NonceRequest,
    NonceResponse,
    TransferRequest,
    TransferResponse,
)
from chanchis.server.services.deps import TransferServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["transfer"])


@router.post(
    "/nonce",
    response_model=NonceResponse,
    summary="Get Permit Nonce",
    description="Return the owner's current EIP-2612 nonce and the sponsor wallet the permit must name as spender.",
    responses={
        400: {"description": "Owner address missing or invalid"},
        500: {"description": "Sponsor wallet not configured"},
    },
)
async def get_permit_nonce(payload: NonceRequest, service: TransferServiceDep) -> NonceResponse:
    if not payload.owner:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Owner address required")
    result = await service.get_permit_nonce(payload.owner)
    return NonceResponse(nonce=str(result.nonce), spender=result.spender)


@router.post(
    "",
    response_model=TransferResponse,
    summary="Relay Gasless Transfer",
    description="Relay a signed permit and the matching transferFrom through the sponsor wallet.",
    responses={
        400: {"description": "Missing or invalid parameters, expired permit or signer mismatch"},
        500: {"description": "Server not configured or the relayer rejected a step"},
    },
)
async def relay_transfer(payload: TransferRequest, service: TransferServiceDep) -> TransferResponse:
    """
    Relay a gasless CHNC transfer.

    - **from**: Token owner who signed the permit.
    - **to**: Recipient address.
    - **amount**: Amount in base units, as a decimal string.
    - **deadline**: Permit deadline in unix seconds, as a decimal string.
    - **signature**: The 65-byte permit signature.
    """
    if not payload.is_complete():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required parameters")
    result = await service.relay_transfer(
        owner=payload.from_address,
        recipient=payload.to,
        amount=payload.amount,
        deadline=payload.deadline,
        signature=payload.signature,
    )
    return TransferResponse(
        success=True,
        permit_tx_hash=result.permit_tx_hash,
        transfer_tx_hash=result.transfer_tx_hash,
    )
