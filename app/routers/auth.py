"""
Authentication API endpoints for administrator registration, login and profile.
"""

from fastapi import APIRouter, Depends, status
from app.services.auth import AuthService
from app.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    AdminResponse,
    ProfileResponse
)
from app.utils.auth import TokenSubject
from app.utils.dependencies import get_auth_service, get_current_admin
from app.utils.exceptions import NotFoundError, UnknownEmailError


router = APIRouter(tags=["Authentication"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register administrator",
    description="Create an administrator account"
)
async def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> RegisterResponse:
    """
    Register a new administrator.

    Raises:
        ValidationError: If a field is missing or the email is malformed
        DuplicateEmailError: If the email is already registered
    """
    admin = await auth_service.register(payload.name, payload.email, payload.password)
    return RegisterResponse(userId=admin.id)


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Administrator login",
    description="Authenticate with email and password, returns a bearer token valid for 24 hours"
)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
) -> LoginResponse:
    """
    Authenticate an administrator and return a session token.

    Raises:
        UnknownEmailError: If no account has this email
        WrongPasswordError: If the password is wrong
        InvalidHashError: If the stored hash is corrupted
    """
    try:
        admin, token = await auth_service.login(payload.email, payload.password)
    except NotFoundError:
        raise UnknownEmailError()

    return LoginResponse(user=AdminResponse.model_validate(admin), token=token)


@router.get(
    "/user/profile",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current administrator",
    description="Profile of the administrator the bearer token was issued to"
)
async def get_profile(
    current_admin: TokenSubject = Depends(get_current_admin),
    auth_service: AuthService = Depends(get_auth_service)
) -> ProfileResponse:
    admin = await auth_service.get_profile(current_admin.admin_id)
    return ProfileResponse(data=AdminResponse.model_validate(admin))
