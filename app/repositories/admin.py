"""
Administrator repository: the credential store.
Email lookups are exact and case-sensitive.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from app.repositories.base import BaseRepository
from app.models.admin import Admin
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class AdminRepository(BaseRepository[Admin]):
    """Repository for administrator accounts."""

    def __init__(self, db: AsyncSession):
        super().__init__(Admin, db)

    async def get_by_email(self, email: str) -> Optional[Admin]:
        """
        Get administrator by email address (exact match).

        Args:
            email: Email address to search for

        Returns:
            Admin instance if found, None otherwise
        """
        try:
            result = await self.db.execute(select(Admin).where(Admin.email == email))
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get admin by email: {e}")
            raise

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def create_admin(self, name: str, email: str, password_hash: str) -> Admin:
        """
        Persist a new administrator. The caller hashes the password.

        Returns:
            Created admin instance
        """
        admin = await self.create({
            "name": name,
            "email": email,
            "password_hash": password_hash,
        })
        logger.info(f"Created admin: {admin.email} (ID: {admin.id})")
        return admin
