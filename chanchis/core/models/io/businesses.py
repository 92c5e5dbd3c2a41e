"""
Business I/O models for API requests and responses.

These schemas define the contract of the business directory endpoints and
are kept separate from the database entity so both can evolve independently.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chanchis.core.chain.addresses import normalize_address
from chanchis.core.errors import InvalidAddressError


class BusinessRead(BaseModel):
    """Schema for reading a business from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    wallet_address: str
    owner_name: str
    business_name: str
    description: str
    location: Optional[str] = None
    cashback_percentage: float
    cover_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BusinessCreate(BaseModel):
    """Schema for registering a business."""

    wallet_address: str = Field(description="Owner wallet address")
    owner_name: str = Field(min_length=1, max_length=128)
    business_name: str = Field(min_length=1, max_length=128)
    description: str = Field(min_length=1)
    location: Optional[str] = Field(default=None, max_length=256)
    cashback_percentage: float = Field(ge=0.0, le=100.0, description="Cashback offered, in percent")
    cover_image_url: Optional[str] = None

    @field_validator("wallet_address")
    @classmethod
    def normalize_wallet(cls, value: str) -> str:
        try:
            return normalize_address(value, "wallet_address")
        except InvalidAddressError as e:
            raise ValueError(e.message) from e


class BusinessUpdate(BaseModel):
    """Schema for updating a business.

    ``wallet_address`` identifies the caller and is only used for the
    ownership check; it is never written.
    """

    wallet_address: str = Field(description="Wallet of the caller, must own the business")
    business_name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    description: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, max_length=256)
    cashback_percentage: Optional[float] = Field(default=None, ge=0.0, le=100.0)
    cover_image_url: Optional[str] = None

    def changes(self) -> dict:
        """Fields explicitly sent by the client, minus the caller wallet.

        ``business_name`` and ``description`` cannot be cleared, so an explicit
        null for them is ignored.
        """
        data = self.model_dump(exclude_unset=True, exclude={"wallet_address"})
        for required in ("business_name", "description", "cashback_percentage"):
            if data.get(required, "") is None:
                data.pop(required)
        return data


class BusinessResponse(BaseModel):
    business: BusinessRead


class BusinessLookupResponse(BaseModel):
    business: Optional[BusinessRead] = None


class BusinessListResponse(BaseModel):
    businesses: List[BusinessRead]


class DeleteResponse(BaseModel):
    success: bool = True


class CashbackQuoteRead(BaseModel):
    """Cashback owed for a purchase at a business, in USD and CHNC."""

    business_id: str
    cashback_percentage: float
    purchase_usd: Decimal
    cashback_usd: Decimal
    chnc_price_usd: Decimal
    chnc_amount: Decimal
