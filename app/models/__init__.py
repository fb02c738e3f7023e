"""
Database models for the Real Estate Marketplace API.
Includes Admin, Property, and Transaction models.
"""

from app.models.admin import Admin
from app.models.property import Property, DEFAULT_PROPERTY_TYPE, PRICE_SCALE, ETH_SCALE
from app.models.transaction import Transaction, TransactionStatus

# Export all models for easy importing
__all__ = [
    "Admin",
    "Property",
    "DEFAULT_PROPERTY_TYPE",
    "PRICE_SCALE",
    "ETH_SCALE",
    "Transaction",
    "TransactionStatus",
]
