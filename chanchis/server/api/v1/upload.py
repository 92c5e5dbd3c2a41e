"""
Cover Image Upload Endpoint.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from chanchis.core.chain.addresses import normalize_address
from chanchis.core.models.io.wallet import UploadResponse
from chanchis.server.services.deps import CoverServiceDep

router = APIRouter(tags=["upload"])


@router.post(
    "",
    response_model=UploadResponse,
    summary="Upload Cover Image",
    description="Store a business cover image and return its public URL.",
    responses={
        400: {"description": "File or wallet missing, or the file is not an image"},
        413: {"description": "File too large"},
        500: {"description": "Storage not configured or upload failed"},
    },
)
async def upload_cover(
    service: CoverServiceDep,
    file: Optional[UploadFile] = File(default=None),
    wallet: Optional[str] = Form(default=None),
) -> UploadResponse:
    """
    Upload a cover image.

    - **file**: The image, sent as multipart form data.
    - **wallet**: Wallet of the uploader, used to name the stored object.
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")
    if not wallet:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Wallet address required")

    service.check_size(file.size)
    # One byte past the limit is enough to detect an oversized body
    content = await file.read(service.max_bytes + 1)
    url = await service.upload(
        wallet_address=normalize_address(wallet, "wallet"),
        filename=file.filename,
        content_type=file.content_type,
        content=content,
    )
    return UploadResponse(url=url)
