"""
Transaction repository: purchase log queries and dashboard aggregates.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from app.repositories.base import BaseRepository
from app.models.transaction import Transaction, TransactionStatus
from app.models.property import Property
from decimal import Decimal
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

# (transaction, property title, property image)
TransactionRow = Tuple[Transaction, Optional[str], Optional[str]]


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for the transaction log."""

    def __init__(self, db: AsyncSession):
        super().__init__(Transaction, db)

    async def list_with_property(self, limit: Optional[int] = None, by_created_at: bool = False) -> List[TransactionRow]:
        """
        Transactions left-joined with their property's title and image, newest first.

        Args:
            limit: Maximum number of rows
            by_created_at: Order by creation time instead of id

        Returns:
            List of (transaction, property_title, property_image) tuples
        """
        try:
            query = (
                select(Transaction, Property.title, Property.image)
                .outerjoin(Property, Transaction.property_id == Property.id)
            )
            if by_created_at:
                query = query.order_by(Transaction.created_at.desc(), Transaction.id.desc())
            else:
                query = query.order_by(Transaction.id.desc())
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            return [(row[0], row[1], row[2]) for row in result.all()]
        except Exception as e:
            logger.error(f"Failed to list transactions: {e}")
            raise

    async def total_eth_completed(self) -> Decimal:
        """Sum of eth_amount over completed transactions (0 when none)."""
        try:
            result = await self.db.execute(
                select(func.coalesce(func.sum(Transaction.eth_amount), 0))
                .where(Transaction.status == TransactionStatus.COMPLETED.value)
            )
            return Decimal(str(result.scalar() or 0))
        except Exception as e:
            logger.error(f"Failed to sum transaction amounts: {e}")
            raise
