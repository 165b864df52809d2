"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for user registration."""

    username: str = Field(..., description="Unique username, 3 to 50 characters")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class RegisterResponse(BaseModel):
    """Response for a successful registration."""

    id: str = Field(..., description="ID of the new user")
    username: str = Field(..., description="Registered username")
    email: str = Field(..., description="Registered email address, lowercased")


class LoginRequest(BaseModel):
    """Request body for user login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class RefreshRequest(BaseModel):
    """Request body for token refresh."""

    refresh_token: str = Field(..., description="Refresh token from login or a previous refresh")


class UserResponse(BaseModel):
    """User information in auth responses."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="User's email address")
    role: str = Field(..., description="USER or ADMIN")
    enabled: bool = Field(..., description="Whether the account is enabled")


class AuthResponse(BaseModel):
    """Response for successful login or token refresh."""

    token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="Bearer", description="Token type for the Authorization header")
    expires_in: int = Field(..., description="Access token expiration time in seconds")
    user: UserResponse = Field(..., description="User information")


class ValidationErrorDetail(BaseModel):
    """Detail for a single validation error."""

    field: str = Field(..., description="Field name that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Machine-readable error code")


class ValidationErrorResponse(BaseModel):
    """Response for validation errors."""

    error: str = Field(..., description="Error type")
    details: list[ValidationErrorDetail] = Field(..., description="List of validation errors")


class ConflictErrorResponse(BaseModel):
    """Response for conflict errors (duplicate username or email)."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    field: str = Field(..., description="Field that caused the conflict")


class ErrorResponse(BaseModel):
    """Response for authentication and authorization failures."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
