"""
Service layer for business logic implementation.
Contains services for authentication, properties, transactions, image assets and error handling.
"""

from .assets import AssetStore, LocalAssetStore
from .auth import AuthService
from .property import PropertyService
from .transaction import TransactionService
from .error_handler import ErrorHandlerService

__all__ = [
    "AssetStore",
    "LocalAssetStore",
    "AuthService",
    "PropertyService",
    "TransactionService",
    "ErrorHandlerService"
]
