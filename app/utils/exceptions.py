"""
Custom exception classes for the Real Estate Marketplace API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """
    Malformed or missing input.
    Carries every missing and every invalid field so clients see them all at once.
    """

    def __init__(
        self,
        detail: str,
        missing: Optional[List[str]] = None,
        invalid: Optional[List[str]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.missing = missing or []
        self.invalid = invalid or []


class DuplicateEmailError(APIException):
    """An administrator with this email already exists."""

    def __init__(self, email: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Email '{email}' is already registered",
            error_code="DUPLICATE_EMAIL"
        )


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[Any] = None):
        detail = f"{resource} not found"
        if resource_id is not None:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


# Authentication exceptions
class AuthError(APIException):
    """Base class for authentication failures."""


class MissingTokenError(AuthError):
    """No bearer token on a protected request."""

    def __init__(self, detail: str = "Access token required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="MISSING_TOKEN",
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidTokenError(AuthError):
    """Bearer token failed signature, payload or expiry checks."""

    def __init__(self, detail: str = "Invalid or expired token"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            error_code="INVALID_TOKEN"
        )


class UnknownEmailError(AuthError):
    """Login attempted with an email that has no account."""

    def __init__(self, detail: str = "Email not found"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNKNOWN_EMAIL"
        )


class WrongPasswordError(AuthError):
    """Password does not match the stored hash."""

    def __init__(self, detail: str = "Wrong password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="WRONG_PASSWORD"
        )


class InvalidHashError(AuthError):
    """Stored password hash is structurally malformed (corrupted data)."""

    def __init__(self, detail: str = "Stored password hash is invalid - data corrupted"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="INVALID_PASSWORD_HASH"
        )


# File upload exceptions
class UnsupportedMediaError(APIException):
    """Uploaded file is not an accepted image."""

    def __init__(self, detail: str = "Only image files are allowed"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="UNSUPPORTED_MEDIA"
        )


class PayloadTooLargeError(APIException):
    """Uploaded file exceeds the size limit."""

    def __init__(self, max_size: int):
        max_mb = max_size / (1024 * 1024)
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File too large (maximum {max_mb:g}MB)",
            error_code="PAYLOAD_TOO_LARGE"
        )
        self.max_size = max_size


# Storage exceptions
class PersistenceError(APIException):
    """Underlying storage failure."""

    def __init__(self, detail: str = "Database operation failed", error_code: str = "PERSISTENCE_ERROR"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code=error_code
        )


class SchemaMismatchError(PersistenceError):
    """Database schema does not match the models (missing table or column)."""

    def __init__(self, detail: str = "Database schema does not match the expected structure"):
        super().__init__(detail=detail, error_code="SCHEMA_MISMATCH")
