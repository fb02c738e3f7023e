"""
Repository layer for data access operations.
"""

from app.repositories.base import BaseRepository
from app.repositories.admin import AdminRepository
from app.repositories.property import PropertyRepository
from app.repositories.transaction import TransactionRepository

__all__ = [
    "BaseRepository",
    "AdminRepository",
    "PropertyRepository",
    "TransactionRepository",
]
