"""API Schemas for request/response validation."""

from wrappedup.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    ConflictErrorResponse,
    ErrorResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    ValidationErrorDetail,
    ValidationErrorResponse,
)

__all__ = [
    "AuthResponse",
    "ConflictErrorResponse",
    "ErrorResponse",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "RegisterResponse",
    "UserResponse",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
