"""
Utility modules for the Real Estate Marketplace API.
"""

from .auth import PasswordHasher, TokenService, TokenSubject

from .exceptions import (
    APIException,
    ValidationError,
    DuplicateEmailError,
    NotFoundError,
    AuthError,
    MissingTokenError,
    InvalidTokenError,
    UnknownEmailError,
    WrongPasswordError,
    InvalidHashError,
    UnsupportedMediaError,
    PayloadTooLargeError,
    PersistenceError,
    SchemaMismatchError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "PasswordHasher",
    "TokenService",
    "TokenSubject",

    # Exceptions
    "APIException",
    "ValidationError",
    "DuplicateEmailError",
    "NotFoundError",
    "AuthError",
    "MissingTokenError",
    "InvalidTokenError",
    "UnknownEmailError",
    "WrongPasswordError",
    "InvalidHashError",
    "UnsupportedMediaError",
    "PayloadTooLargeError",
    "PersistenceError",
    "SchemaMismatchError",
]
