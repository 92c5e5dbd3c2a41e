"""
Business entity models.

This module contains the database entity for the affiliated business
directory. Each wallet may own at most one business, which offers a
cashback percentage paid out in CHNC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlmodel import Field

from ..base import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BusinessBase(Base):
    """Base fields for a business."""

    wallet_address: str = Field(
        max_length=42, index=True, unique=True, description="Owner wallet address, stored lowercase"
    )
    owner_name: str = Field(max_length=128, description="Display name of the owner")
    business_name: str = Field(max_length=128, description="Business display name")
    description: str = Field(description="Free-text description")
    location: Optional[str] = Field(default=None, max_length=256, description="Address or area")
    cashback_percentage: float = Field(ge=0.0, le=100.0, description="Cashback offered, in percent")
    cover_image_url: Optional[str] = Field(default=None, description="Public URL of the cover image")


class Business(BusinessBase, table=True):
    """Persistent business listing.

    Table: businesses
    """

    __tablename__ = "businesses"
    __table_args__ = ({"extend_existing": True},)

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True, max_length=36)

    created_at: datetime = Field(default_factory=_utc_now, index=True)
    updated_at: datetime = Field(default_factory=_utc_now)

    def is_owned_by(self, wallet_address: Optional[str]) -> bool:
        """Case-insensitive ownership check."""
        return bool(wallet_address) and self.wallet_address == wallet_address.lower()

    def __repr__(self) -> str:
        return f"Business(id={self.id}, name={self.business_name}, wallet={self.wallet_address})"
