"""
Authentication utilities for JWT session tokens and password hashing.
Provides bcrypt hashing with malformed-hash detection and signed, time-bounded tokens.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
import logging

from app.utils.exceptions import InvalidTokenError, InvalidHashError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted one-way password hashing backed by passlib's bcrypt handler."""

    def __init__(self, rounds: int = 10):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds
        )

    def hash(self, password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string (a fresh salt every call)
        """
        return self.context.hash(password)

    def verify(self, password: str, hashed_password: Any) -> bool:
        """
        Verify password against a stored hash.

        Args:
            password: Plain text password
            hashed_password: Hash as read from the database

        Returns:
            True if password matches, False otherwise

        Raises:
            InvalidHashError: If the stored hash is missing or malformed
        """
        if not hashed_password or not isinstance(hashed_password, str):
            raise InvalidHashError()

        if self.context.identify(hashed_password) is None:
            raise InvalidHashError()

        try:
            return self.context.verify(password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error(f"Stored password hash rejected by hasher: {e}")
            raise InvalidHashError()


class TokenSubject:
    """Identity carried inside a session token."""

    def __init__(
        self,
        admin_id: int,
        email: str,
        name: str,
        issued_at: Optional[datetime] = None,
        expires_at: Optional[datetime] = None
    ):
        self.admin_id = admin_id
        self.email = email
        self.name = name
        self.issued_at = issued_at
        self.expires_at = expires_at

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "TokenSubject":
        """Create TokenSubject from decoded JWT claims."""
        return cls(
            admin_id=int(claims["sub"]),
            email=claims["email"],
            name=claims["name"],
            issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )

    def __repr__(self) -> str:
        return f"<TokenSubject(admin_id={self.admin_id}, email={self.email})>"


class TokenService:
    """Issues and verifies HS256 session tokens signed with the server secret."""

    TOKEN_TYPE = "access"

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_hours: int = 24):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = timedelta(hours=expire_hours)

    def issue(self, admin_id: int, email: str, name: str, now: Optional[datetime] = None) -> str:
        """
        Create a signed session token for an administrator.

        Args:
            admin_id: Administrator's ID
            email: Administrator's email address
            name: Administrator's name
            now: Issue instant, defaults to the current time

        Returns:
            Encoded JWT token string
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": str(admin_id),
            "email": email,
            "name": name,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
            "type": self.TOKEN_TYPE,
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenSubject:
        """
        Verify and decode a session token.

        Args:
            token: JWT token string

        Returns:
            TokenSubject of the administrator the token was issued to

        Raises:
            InvalidTokenError: If the signature, payload or expiry check fails
        """
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            raise InvalidTokenError()

        if claims.get("type") != self.TOKEN_TYPE:
            raise InvalidTokenError()

        try:
            return TokenSubject.from_claims(claims)
        except (KeyError, TypeError, ValueError):
            raise InvalidTokenError()
