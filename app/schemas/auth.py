"""
Pydantic schemas for administrator registration, login and profile responses.
Request fields are optional so that missing values are reported by the service
together, as a single validation error.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class RegisterRequest(BaseModel):
    """Registration request schema."""

    name: Optional[str] = Field(None, description="Administrator name", example="Alice")
    email: Optional[str] = Field(None, description="Login email", example="alice@example.com")
    password: Optional[str] = Field(None, description="Plain text password", example="secret123")


class LoginRequest(BaseModel):
    """Login request schema."""

    email: Optional[str] = Field(None, description="Login email", example="alice@example.com")
    password: Optional[str] = Field(None, description="Plain text password", example="secret123")


class AdminResponse(BaseModel):
    """Administrator data returned to clients (never includes the password hash)."""

    id: int = Field(..., description="Administrator ID", example=1)
    name: str = Field(..., description="Administrator name", example="Alice")
    email: str = Field(..., description="Login email", example="alice@example.com")
    created_at: Optional[datetime] = Field(None, description="Account creation timestamp")

    model_config = {"from_attributes": True}


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Registration successful"
    userId: int = Field(..., description="ID of the new administrator", example=1)


class LoginResponse(BaseModel):
    """Complete login response schema."""

    success: bool = True
    message: str = "Login successful"
    user: AdminResponse
    token: str = Field(
        ...,
        description="Bearer token valid for 24 hours",
        example="eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
    )


class ProfileResponse(BaseModel):
    success: bool = True
    data: AdminResponse
