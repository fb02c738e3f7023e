"""
Liveness and health endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.context import ServiceContext
from app.schemas.common import MessageResponse
from app.utils.dependencies import get_context
from app.utils.exceptions import PersistenceError


router = APIRouter(tags=["Health"])


@router.get(
    "/ping",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness check"
)
async def ping() -> MessageResponse:
    return MessageResponse(message="Server is running")


@router.get(
    "/health/db",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Database health check"
)
async def database_health_check(context: ServiceContext = Depends(get_context)) -> MessageResponse:
    """
    Raises:
        PersistenceError: If the database cannot be reached
    """
    if not await context.database.check_connection():
        raise PersistenceError("Database connection failed")
    return MessageResponse(message="Database connected")
