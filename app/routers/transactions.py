"""
Transaction log and dashboard statistics endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.context import ServiceContext
from app.repositories.transaction import TransactionRow
from app.services.transaction import TransactionService
from app.schemas.transaction import (
    TransactionCreate,
    TransactionSummary,
    TransactionListResponse,
    TransactionCreatedResponse,
    DashboardStats,
    DashboardStatsResponse
)
from app.utils.dependencies import get_context, get_request_origin, get_transaction_service


router = APIRouter(tags=["Transactions"])


def to_summary(row: TransactionRow, context: ServiceContext, origin: str) -> TransactionSummary:
    transaction, property_title, property_image = row
    data = transaction.to_dict()
    data["property_title"] = property_title
    data["property_image"] = context.assets.to_public_url(property_image, origin)
    return TransactionSummary.model_validate(data)


@router.get(
    "/transactions",
    response_model=TransactionListResponse,
    status_code=status.HTTP_200_OK,
    summary="List transactions",
    description="All transactions with their property title and image, newest first"
)
async def list_transactions(
    transaction_service: TransactionService = Depends(get_transaction_service),
    context: ServiceContext = Depends(get_context),
    origin: str = Depends(get_request_origin)
) -> TransactionListResponse:
    rows = await transaction_service.list_transactions()
    return TransactionListResponse(data=[to_summary(row, context, origin) for row in rows])


@router.post(
    "/transactions",
    response_model=TransactionCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record transaction",
    description="Record a completed property purchase"
)
async def create_transaction(
    payload: TransactionCreate,
    transaction_service: TransactionService = Depends(get_transaction_service)
) -> TransactionCreatedResponse:
    """
    Raises:
        ValidationError: If required fields are missing or malformed
        NotFoundError: If the property doesn't exist
    """
    transaction = await transaction_service.create_transaction(payload.model_dump())
    return TransactionCreatedResponse(transactionId=transaction.id)


@router.get(
    "/dashboard/stats",
    response_model=DashboardStatsResponse,
    status_code=status.HTTP_200_OK,
    summary="Dashboard statistics",
    description="Property and transaction totals with the five most recent transactions"
)
async def dashboard_stats(
    transaction_service: TransactionService = Depends(get_transaction_service),
    context: ServiceContext = Depends(get_context),
    origin: str = Depends(get_request_origin)
) -> DashboardStatsResponse:
    stats = await transaction_service.dashboard_stats()
    stats["recentTransactions"] = [
        to_summary(row, context, origin) for row in stats["recentTransactions"]
    ]
    return DashboardStatsResponse(data=DashboardStats.model_validate(stats))
