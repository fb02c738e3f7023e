"""
Error handling service for consistent error response formatting and logging.
Translates the API exception taxonomy, database errors and unexpected failures
into JSON responses at the outermost boundary.
"""

from typing import Dict, Any, Optional, List
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.utils.exceptions import (
    APIException,
    ValidationError,
    PersistenceError,
    SchemaMismatchError,
)
import logging
import uuid

logger = logging.getLogger(__name__)


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Every error body has the shape {success: false, message, error_code, request_id}.
    """

    # Driver messages that mean the database structure differs from the models
    SCHEMA_MISMATCH_MARKERS = (
        "no such table",
        "no such column",
        "undefinedtable",
        "undefinedcolumn",
        "does not exist",
        "doesn't exist",
        "unknown column",
        "has no column named",
    )

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        request_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            error_code: Error code identifier
            message: Human-readable error message
            request_id: Optional request identifier for tracking
            extra: Additional top-level keys (missing fields, debug detail)

        Returns:
            Formatted error response dictionary
        """
        response = {
            "success": False,
            "message": message,
            "error_code": error_code,
        }

        if request_id:
            response["request_id"] = request_id

        if extra:
            response.update(extra)

        return response

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Validation errors carry their missing/invalid field lists; server-side
        failures (5xx) are logged at error level.
        """
        request_id = ErrorHandlerService._generate_request_id()
        log = logger.error if exception.status_code >= 500 else logger.warning
        log(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        extra: Dict[str, Any] = {}
        if isinstance(exception, ValidationError):
            extra["missing"] = exception.missing
            if exception.invalid:
                extra["invalid"] = exception.invalid

        error_response = ErrorHandlerService.format_error_response(
            error_code=exception.error_code or "API_ERROR",
            message=exception.detail,
            request_id=request_id,
            extra=extra
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(exception: RequestValidationError, request: Optional[Request] = None) -> JSONResponse:
        """
        Handle request validation errors (malformed body, bad path parameters)
        with detailed field information.
        """
        request_id = ErrorHandlerService._generate_request_id()

        validation_details: List[Dict[str, Any]] = []
        for error in exception.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            validation_details.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
            })

        logger.warning(
            f"Validation Error [{request_id}]: {len(validation_details)} field errors",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "validation_errors": validation_details
            }
        )

        error_response = ErrorHandlerService.format_error_response(
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            request_id=request_id,
            extra={"missing": [], "details": validation_details}
        )

        return JSONResponse(status_code=400, content=error_response)

    @staticmethod
    def classify_database_error(exception: SQLAlchemyError) -> APIException:
        """
        Map a SQLAlchemy error onto the persistence taxonomy.

        Returns:
            SchemaMismatchError for missing tables/columns, PersistenceError otherwise
        """
        original = getattr(exception, "orig", None) or exception
        description = f"{type(original).__name__} {original}".lower()

        if any(marker in description for marker in ErrorHandlerService.SCHEMA_MISMATCH_MARKERS):
            return SchemaMismatchError()
        return PersistenceError()

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None,
        expose_details: bool = False
    ) -> JSONResponse:
        """
        Handle database errors with appropriate error responses.
        Internal details are only included when expose_details is set.
        """
        request_id = ErrorHandlerService._generate_request_id()

        if isinstance(exception, IntegrityError):
            error_code = "INTEGRITY_ERROR"
            message = ErrorHandlerService._extract_constraint_info(exception) or "Data integrity constraint violation"
            status_code = 400
        else:
            classified = ErrorHandlerService.classify_database_error(exception)
            error_code = classified.error_code
            message = classified.detail
            status_code = classified.status_code

        logger.error(
            f"Database Error [{request_id}]: {error_code} - {str(exception)}",
            extra={
                "error_code": error_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=True
        )

        extra = {"error": str(exception)} if expose_details else None
        error_response = ErrorHandlerService.format_error_response(
            error_code=error_code,
            message=message,
            request_id=request_id,
            extra=extra
        )

        return JSONResponse(status_code=status_code, content=error_response)

    @staticmethod
    def handle_http_exception(exception: StarletteHTTPException, request: Optional[Request] = None) -> JSONResponse:
        """Handle framework HTTP exceptions (unknown routes, wrong methods, static 404s)."""
        request_id = ErrorHandlerService._generate_request_id()

        logger.warning(
            f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}",
            extra={
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        error_response = ErrorHandlerService.format_error_response(
            error_code=f"HTTP_{exception.status_code}",
            message=str(exception.detail),
            request_id=request_id
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=error_response,
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None,
        expose_details: bool = False
    ) -> JSONResponse:
        """
        Handle unexpected errors with secure error responses.
        """
        request_id = ErrorHandlerService._generate_request_id()

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {str(exception)}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__,
            },
            exc_info=True
        )

        extra = {"error": f"{type(exception).__name__}: {exception}"} if expose_details else None
        error_response = ErrorHandlerService.format_error_response(
            error_code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred. Please try again later.",
            request_id=request_id,
            extra=extra
        )

        return JSONResponse(status_code=500, content=error_response)

    @staticmethod
    def _generate_request_id() -> str:
        """Generate a unique request ID for error tracking."""
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """
        Extract constraint information from integrity error.

        Returns:
            Constraint information string or None
        """
        error_msg = str(exception.orig).lower()

        if "unique" in error_msg or "duplicate" in error_msg:
            return "Duplicate value for unique field"
        elif "foreign key" in error_msg:
            return "Referenced record does not exist"
        elif "not null" in error_msg:
            return "Required field cannot be empty"
        elif "check constraint" in error_msg:
            return "Value does not meet validation requirements"

        return None
