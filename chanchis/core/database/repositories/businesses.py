"""
Business repository implementation.

This module provides data access operations for the affiliated business
directory. Wallet addresses are compared in lowercase.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.businesses import Business
from .base import AsyncBaseRepository, QueryBuilder


class BusinessRepository(AsyncBaseRepository[Business]):
    """Repository for business data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Business)

    async def create(self, business: Business) -> Business:
        business.wallet_address = business.wallet_address.lower()
        self.session.add(business)
        await self.session.commit()
        await self.session.refresh(business)
        return business

    async def get_by_id(self, business_id: str | int) -> Optional[Business]:
        stmt = select(Business).where(Business.id == str(business_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_wallet(self, wallet_address: str) -> Optional[Business]:
        """Get the business owned by ``wallet_address``, if any.

        Args:
            wallet_address: Owner wallet, any case

        Returns:
            Business instance or None
        """
        stmt = select(Business).where(Business.wallet_address == wallet_address.lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update(self, business: Business) -> Business:
        business.updated_at = datetime.now(timezone.utc)
        self.session.add(business)
        await self.session.commit()
        await self.session.refresh(business)
        return business

    async def apply_update(self, business: Business, changes: Dict[str, Any]) -> Business:
        """Set the given fields on ``business`` and persist it.

        Args:
            business: Loaded business to modify
            changes: Field values to set; unknown fields are ignored

        Returns:
            Updated Business instance
        """
        for key, value in changes.items():
            if hasattr(business, key):
                setattr(business, key, value)
        return await self.update(business)

    async def delete(self, business_id: str | int) -> bool:
        business = await self.get_by_id(business_id)
        if business:
            await self.session.delete(business)
            await self.session.commit()
            return True
        return False

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Business]:
        """List businesses, newest first.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Equality filters on business fields

        Returns:
            List of Business instances
        """
        stmt = select(Business).order_by(Business.created_at.desc())
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, Business, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())
