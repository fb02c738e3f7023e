"""
Transaction service: records property purchases and computes dashboard statistics.
"""

from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.transaction import TransactionRepository, TransactionRow
from app.repositories.property import PropertyRepository
from app.models.property import ETH_SCALE
from app.models.transaction import Transaction, TransactionStatus
from app.utils.validators import ValidationUtils
from app.utils.exceptions import NotFoundError, ValidationError
import logging

logger = logging.getLogger(__name__)


class TransactionService:
    """Write-once purchase log plus read-side aggregates."""

    REQUIRED_FIELDS = ("name", "email", "property_id", "ethAmount", "txHash")
    RECENT_LIMIT = 5

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.transaction_repo = TransactionRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def list_transactions(self) -> List[TransactionRow]:
        """All transactions with their property summary, newest first."""
        return await self.transaction_repo.list_with_property()

    async def create_transaction(self, fields: Dict[str, Any]) -> Transaction:
        """
        Record a completed purchase.

        Args:
            fields: name, email, property_id, ethAmount, txHash, and optional phone, user_id

        Returns:
            Created transaction

        Raises:
            ValidationError: If required fields are missing or malformed
            NotFoundError: If the referenced property doesn't exist
        """
        missing = ValidationUtils.missing_fields(fields, self.REQUIRED_FIELDS)
        if missing:
            raise ValidationError(
                f"Required fields missing: {', '.join(missing)}",
                missing=missing
            )

        invalid = []
        eth_amount = ValidationUtils.normalize_amount(fields["ethAmount"], scale=ETH_SCALE)
        if eth_amount is None:
            invalid.append("ethAmount")
        try:
            property_id = int(fields["property_id"])
        except (TypeError, ValueError):
            invalid.append("property_id")
        if invalid:
            raise ValidationError(f"Invalid values: {', '.join(invalid)}", invalid=invalid)

        if await self.property_repo.get_by_id(property_id) is None:
            raise NotFoundError("Property", property_id)

        transaction = await self.transaction_repo.create({
            "property_id": property_id,
            "buyer_id": fields.get("user_id"),
            "name": str(fields["name"]).strip(),
            "email": str(fields["email"]).strip(),
            "phone": ValidationUtils.clean_text(fields.get("phone")),
            "eth_amount": eth_amount,
            "tx_hash": str(fields["txHash"]).strip(),
            "status": TransactionStatus.COMPLETED.value,
        })

        logger.info(f"Transaction recorded: {transaction.id} for property {property_id}")
        return transaction

    async def dashboard_stats(self) -> Dict[str, Any]:
        """
        Aggregate counts for the admin dashboard.

        Returns:
            Dictionary with totalProperties, totalTransactions, totalEth,
            pendingTransactions and recentTransactions rows
        """
        return {
            "totalProperties": await self.property_repo.count(),
            "totalTransactions": await self.transaction_repo.count(),
            "totalEth": await self.transaction_repo.total_eth_completed(),
            "pendingTransactions": await self.transaction_repo.count(
                {"status": TransactionStatus.PENDING.value}
            ),
            "recentTransactions": await self.transaction_repo.list_with_property(
                limit=self.RECENT_LIMIT, by_created_at=True
            ),
        }
