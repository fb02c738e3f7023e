"""
Property repository for marketplace listings.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.base import BaseRepository
from app.models.property import Property
from typing import List
import logging

logger = logging.getLogger(__name__)


class PropertyRepository(BaseRepository[Property]):
    """Repository for property listings."""

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    async def list_newest_first(self) -> List[Property]:
        """All properties, highest id first."""
        return await self.get_multi(newest_first=True)
