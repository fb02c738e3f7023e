"""
Transaction model: append-only log of property purchases paid in ETH.
"""

from sqlalchemy import String, Numeric, Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from app.models.property import ETH_SCALE
from datetime import datetime
from decimal import Decimal
from typing import Optional
import enum


class TransactionStatus(str, enum.Enum):
    """Transaction status values."""
    COMPLETED = "Completed"
    PENDING = "Pending"


class Transaction(Base):
    """Purchase record referencing a property. Never mutated after creation."""

    __tablename__ = "transactions"

    property_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="Purchased property"
    )

    buyer_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Buyer account identifier supplied by the client"
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    eth_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=ETH_SCALE),
        nullable=False,
        comment="Amount paid in ETH"
    )

    tx_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="On-chain transaction hash"
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TransactionStatus.COMPLETED.value,
        index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, property_id={self.property_id}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "buyer_id": self.buyer_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "eth_amount": self.eth_amount,
            "tx_hash": self.tx_hash,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
