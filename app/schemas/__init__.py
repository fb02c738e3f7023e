"""
Pydantic schemas for request/response validation.
"""

from .common import MessageResponse

from .auth import (
    RegisterRequest,
    LoginRequest,
    AdminResponse,
    RegisterResponse,
    LoginResponse,
    ProfileResponse
)

from .property import (
    PropertyResponse,
    PropertyListResponse,
    PropertyDetailResponse
)

from .transaction import (
    TransactionCreate,
    TransactionSummary,
    TransactionListResponse,
    TransactionCreatedResponse,
    DashboardStats,
    DashboardStatsResponse
)

__all__ = [
    "MessageResponse",

    # Authentication
    "RegisterRequest",
    "LoginRequest",
    "AdminResponse",
    "RegisterResponse",
    "LoginResponse",
    "ProfileResponse",

    # Property
    "PropertyResponse",
    "PropertyListResponse",
    "PropertyDetailResponse",

    # Transaction
    "TransactionCreate",
    "TransactionSummary",
    "TransactionListResponse",
    "TransactionCreatedResponse",
    "DashboardStats",
    "DashboardStatsResponse",
]
