"""
API route handlers for the Real Estate Marketplace API.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .transactions import router as transactions_router
from .monitoring import router as monitoring_router

__all__ = ["auth_router", "properties_router", "transactions_router", "monitoring_router"]
