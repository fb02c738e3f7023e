"""
Authentication service for administrator registration, login and profile lookup.
Combines the credential store, the password hasher and the token service.
"""

from typing import Tuple
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.admin import AdminRepository
from app.models.admin import Admin
from app.utils.auth import PasswordHasher, TokenService
from app.utils.validators import ValidationUtils
from app.utils.exceptions import (
    ValidationError,
    DuplicateEmailError,
    NotFoundError,
    WrongPasswordError,
)
import logging

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for administrator accounts.
    Hashing runs in the thread pool so bcrypt's work factor never stalls the event loop.
    """

    REGISTER_FIELDS = ("name", "email", "password")
    LOGIN_FIELDS = ("email", "password")

    def __init__(self, db_session: AsyncSession, hasher: PasswordHasher, tokens: TokenService):
        self.db = db_session
        self.admin_repo = AdminRepository(db_session)
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, name: str, email: str, password: str) -> Admin:
        """
        Register a new administrator.

        Args:
            name: Display name
            email: Login email, unique and case-sensitive; any non-blank value is accepted
            password: Plain text password

        Returns:
            Created Admin

        Raises:
            ValidationError: If any field is blank
            DuplicateEmailError: If the email is already registered
        """
        submitted = {"name": name, "email": email, "password": password}
        missing = ValidationUtils.missing_fields(submitted, self.REGISTER_FIELDS)
        if missing:
            raise ValidationError(
                f"All fields are required: {', '.join(missing)}",
                missing=missing
            )

        name = name.strip()
        email = email.strip()

        if await self.admin_repo.email_exists(email):
            raise DuplicateEmailError(email)

        password_hash = await run_in_threadpool(self.hasher.hash, password)

        try:
            admin = await self.admin_repo.create_admin(name, email, password_hash)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise DuplicateEmailError(email)

        logger.info(f"Administrator registered: {admin.email} (ID: {admin.id})")
        return admin

    async def verify_credentials(self, email: str, password: str) -> Admin:
        """
        Check an email/password pair against the credential store.

        Returns:
            The matching Admin

        Raises:
            NotFoundError: If no administrator has this email
            InvalidHashError: If the stored hash is malformed
            WrongPasswordError: If the password does not match
        """
        admin = await self.admin_repo.get_by_email(email)
        if admin is None:
            logger.warning(f"Login attempt for unknown email: {email}")
            raise NotFoundError("Administrator")

        matches = await run_in_threadpool(self.hasher.verify, password, admin.password_hash)
        if not matches:
            logger.warning(f"Failed login for {email}: wrong password")
            raise WrongPasswordError()

        return admin

    async def login(self, email: str, password: str) -> Tuple[Admin, str]:
        """
        Authenticate an administrator and mint a session token.

        Returns:
            Tuple of (admin, token)

        Raises:
            ValidationError: If email or password is blank
        """
        submitted = {"email": email, "password": password}
        missing = ValidationUtils.missing_fields(submitted, self.LOGIN_FIELDS)
        if missing:
            raise ValidationError(
                f"Email and password are required: {', '.join(missing)}",
                missing=missing
            )

        admin = await self.verify_credentials(email.strip(), password)
        token = self.tokens.issue(admin.id, admin.email, admin.name)

        logger.info(f"Administrator logged in: {admin.email}")
        return admin, token

    async def get_profile(self, admin_id: int) -> Admin:
        """
        Raises:
            NotFoundError: If the administrator no longer exists
        """
        admin = await self.admin_repo.get_by_id(admin_id)
        if admin is None:
            raise NotFoundError("Administrator", admin_id)
        return admin
