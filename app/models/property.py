"""
Property model for marketplace listings.
Prices are stored in fiat and ETH; the image column holds either an external URL
or the filename of a locally stored asset.
"""

from sqlalchemy import String, Text, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from decimal import Decimal
from typing import Optional


DEFAULT_PROPERTY_TYPE = "house"

# Decimal places kept by the amount columns
PRICE_SCALE = 2
ETH_SCALE = 8


class Property(Base):
    """Property listing offered on the marketplace."""

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    property_type: Mapped[str] = mapped_column(
        "type",
        String(50),
        nullable=False,
        default=DEFAULT_PROPERTY_TYPE,
        comment="Property type, e.g. house or apartment"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=PRICE_SCALE),
        nullable=False,
        comment="Price in local currency"
    )

    eth_price: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=ETH_SCALE),
        nullable=False,
        comment="Price in ETH"
    )

    address: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Property address"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    image: Mapped[Optional[str]] = mapped_column(
        String(1024),
        nullable=True,
        comment="External image URL or stored upload filename"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"

    def to_dict(self) -> dict:
        """
        Convert property to dictionary using the public field names.
        The image value is the raw stored reference.
        """
        return {
            "id": self.id,
            "title": self.title,
            "type": self.property_type,
            "price": self.price,
            "ethPrice": self.eth_price,
            "address": self.address,
            "description": self.description,
            "image": self.image,
        }
