"""
FastAPI application entry point.
Builds the application, its service context and the exception handlers.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional
import logging

from app.config import Settings, get_settings
from app.context import ServiceContext
from app.routers import auth_router, properties_router, transactions_router, monitoring_router
from app.services.assets import UPLOADS_ROUTE
from app.services.error_handler import ErrorHandlerService
from app.utils.exceptions import APIException

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    The service refuses to start when the database is unreachable.
    """
    context: ServiceContext = app.state.context
    settings = context.settings

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if not await context.database.check_connection():
        logger.error("Failed to connect to database on startup")
        await context.database.close()
        raise RuntimeError("Database connection failed")

    if settings.auto_create_tables:
        await context.database.create_tables()

    yield

    logger.info("Shutting down application")
    await context.database.close()


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Route every failure through ErrorHandlerService."""
    expose_details = settings.expose_error_details

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        return ErrorHandlerService.handle_database_error(exc, request, expose_details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        return ErrorHandlerService.handle_unexpected_error(exc, request, expose_details)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Configuration to use; defaults to the environment-derived settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    Backend for a real-estate marketplace with crypto-denominated prices.

    ## Features

    * **Administrator accounts**: Registration and login with bcrypt-hashed passwords
    * **Property Management**: Listings with an optional uploaded image
    * **Transactions**: Log of completed ETH purchases
    * **Dashboard**: Aggregate statistics for the admin panel

    ## Authentication

    Mutating property endpoints require authentication. Use `/api/login` to obtain a token,
    then include it in the Authorization header as `Bearer <token>`.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "Authentication", "description": "Administrator registration, login and profile"},
            {"name": "Properties", "description": "Property listing management"},
            {"name": "Transactions", "description": "Purchase log and dashboard statistics"},
            {"name": "Health", "description": "Liveness and database health"},
        ],
        lifespan=lifespan,
    )

    # Building the context creates the upload directory the static mount needs
    app.state.context = ServiceContext.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(properties_router, prefix=settings.api_prefix)
    app.include_router(transactions_router, prefix=settings.api_prefix)
    app.include_router(monitoring_router, prefix=settings.api_prefix)

    app.mount(UPLOADS_ROUTE, StaticFiles(directory=settings.upload_dir), name="uploads")

    register_exception_handlers(app, settings)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
