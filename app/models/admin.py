"""
Administrator model for marketplace operators.
Holds login credentials; the password hash never leaves this model through to_dict().
"""

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base
from datetime import datetime


class Admin(Base):
    """
    Administrator account.
    Email is unique and compared case-sensitively, exactly as stored.
    """

    __tablename__ = "admins"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Administrator display name"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login email - unique"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        """String representation of the administrator."""
        return f"<Admin(id={self.id}, email={self.email})>"

    def to_dict(self) -> dict:
        """
        Convert administrator to dictionary (excluding the password hash).

        Returns:
            Dictionary representation of the administrator
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
