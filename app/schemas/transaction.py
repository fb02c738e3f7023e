"""
Pydantic schemas for transaction requests, listings and dashboard statistics.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Union
from datetime import datetime


class TransactionCreate(BaseModel):
    """
    Transaction creation request.
    Field names follow the client payload (camelCase amounts, snake_case ids).
    """

    name: Optional[str] = Field(None, description="Buyer name", example="Bob")
    email: Optional[str] = Field(None, description="Buyer email", example="bob@example.com")
    phone: Optional[str] = Field(None, description="Buyer phone", example="+628123456789")
    property_id: Optional[Union[int, str]] = Field(None, description="Purchased property ID", example=1)
    ethAmount: Optional[Union[float, str]] = Field(None, description="Amount paid in ETH", example=0.5)
    txHash: Optional[str] = Field(None, description="On-chain transaction hash", example="0xabc123")
    user_id: Optional[int] = Field(None, description="Buyer account ID", example=7)


class TransactionSummary(BaseModel):
    """Transaction joined with its property's title and image."""

    id: int
    property_id: Optional[int] = None
    buyer_id: Optional[int] = None
    name: str
    email: str
    phone: Optional[str] = None
    eth_amount: float
    tx_hash: str
    status: str
    created_at: Optional[datetime] = None
    property_title: Optional[str] = None
    property_image: Optional[str] = None


class TransactionListResponse(BaseModel):
    success: bool = True
    data: List[TransactionSummary]


class TransactionCreatedResponse(BaseModel):
    success: bool = True
    message: str = "Transaction saved"
    transactionId: int


class DashboardStats(BaseModel):
    totalProperties: int
    totalTransactions: int
    totalEth: float
    pendingTransactions: int
    recentTransactions: List[TransactionSummary]


class DashboardStatsResponse(BaseModel):
    success: bool = True
    data: DashboardStats
