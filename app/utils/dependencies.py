"""
FastAPI dependency injection utilities for authentication and database sessions.
Provides the request gate for protected routes and per-request service construction.
"""

from typing import AsyncIterator, Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.context import ServiceContext
from app.services.auth import AuthService
from app.services.property import PropertyService
from app.services.transaction import TransactionService
from app.utils.auth import TokenSubject
from app.utils.exceptions import MissingTokenError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> ServiceContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Service context not initialised.")
    return context


async def get_db(context: ServiceContext = Depends(get_context)) -> AsyncIterator[AsyncSession]:
    """
    Yield an async database session and ensure it's closed after use.
    """
    async with context.database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    context: ServiceContext = Depends(get_context)
) -> AuthService:
    return AuthService(db, context.hasher, context.tokens)


def get_property_service(
    db: AsyncSession = Depends(get_db),
    context: ServiceContext = Depends(get_context)
) -> PropertyService:
    return PropertyService(db, context.assets)


def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


def get_request_origin(request: Request) -> str:
    """Scheme and host the client used to reach this service."""
    return str(request.base_url).rstrip("/")


async def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    context: ServiceContext = Depends(get_context)
) -> TokenSubject:
    """
    Request gate for protected routes.

    Args:
        request: Incoming request; the decoded subject is stored on request.state.admin
        credentials: HTTP Bearer credentials
        context: Service context holding the token service

    Returns:
        TokenSubject of the authenticated administrator

    Raises:
        MissingTokenError: If no bearer token was sent
        InvalidTokenError: If the token fails verification
    """
    if not credentials or not credentials.credentials:
        raise MissingTokenError()

    subject = context.tokens.verify(credentials.credentials)
    request.state.admin = subject
    return subject
