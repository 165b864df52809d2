"""Authentication API routes.

Provides endpoints for user registration, login, token refresh and the
current-user lookup.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.token import TokenPairResult
from wrappedup.domain.entities.user import User
from wrappedup.domain.exceptions import (
    AccountDisabledError,
    DomainValidationError,
    InvalidCredentialsError,
    TokenRefreshError,
    UserAlreadyExistsError,
)
from wrappedup.domain.services import (
    AuthenticationService,
    PasswordValidator,
    RegistrationService,
    TokenRefreshService,
)
from wrappedup.infrastructure.api.dependencies import (
    CurrentUserId,
    get_authentication_service,
    get_password_validator,
    get_registration_service,
    get_token_refresh_service,
    get_user_directory,
)
from wrappedup.infrastructure.api.schemas import (
    AuthResponse,
    ConflictErrorResponse,
    ErrorResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
    ValidationErrorResponse,
)
from wrappedup.infrastructure.auth import jwt_service
from wrappedup.infrastructure.persistence.repositories import SQLAlchemyUserDirectory

logger = get_logger(__name__)

router = APIRouter()


def validation_error(field: str | None, message: str, code: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "details": [{"field": field or "request", "message": message, "code": code}],
        },
    )


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username.value,
        email=user.email.value,
        role=user.role.value,
        enabled=user.enabled,
    )


def auth_response(result: TokenPairResult) -> AuthResponse:
    return AuthResponse(
        token=result.access_token,
        refresh_token=result.refresh_token,
        token_type="Bearer",
        expires_in=jwt_service.access_token_expires_in(),
        user=user_response(result.user),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        409: {"model": ConflictErrorResponse, "description": "Username or email already exists"},
    },
)
async def register(
    request: RegisterRequest,
    service: Annotated[RegistrationService, Depends(get_registration_service)],
    password_validator: Annotated[PasswordValidator, Depends(get_password_validator)],
) -> RegisterResponse | JSONResponse:
    """Register a new user.

    Flow:
    1. Validate password strength
    2. Register the user (username/email checks, hashing, profile creation)
    3. Return the new user's id, username and email
    """
    password_errors = password_validator.validate(request.password)
    if password_errors:
        logger.info(
            "Registration failed: password validation",
            username=request.username,
            error_count=len(password_errors),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Validation error",
                "details": [
                    {"field": e.field, "message": e.message, "code": e.code}
                    for e in password_errors
                ],
            },
        )

    try:
        user_id = await service.register(request.username, request.email, request.password)
    except DomainValidationError as e:
        logger.info("Registration failed: validation", field=e.field, reason=e.message)
        return validation_error(e.field, e.message)
    except UserAlreadyExistsError as e:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": "Conflict", "message": e.message, "field": e.field},
        )

    return RegisterResponse(
        id=user_id,
        username=request.username,
        email=str(request.email).lower(),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation error"},
        401: {"model": ErrorResponse, "description": "Authentication failed"},
    },
)
async def login(
    request: LoginRequest,
    service: Annotated[AuthenticationService, Depends(get_authentication_service)],
) -> AuthResponse | JSONResponse:
    """Authenticate with email and password and receive a token pair.

    Unknown email, wrong password and disabled account all yield the same
    401 response.
    """
    try:
        result = await service.authenticate(request.email, request.password)
    except DomainValidationError as e:
        return validation_error(e.field, e.message)
    except InvalidCredentialsError as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Authentication failed", "message": e.message},
        )

    return auth_response(result)


@router.post(
    "/refresh",
    response_model=AuthResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Expired or invalid refresh token"},
        403: {"model": ErrorResponse, "description": "User account is disabled"},
    },
)
async def refresh(
    request: RefreshRequest,
    service: Annotated[TokenRefreshService, Depends(get_token_refresh_service)],
) -> AuthResponse | JSONResponse:
    """Exchange a refresh token for a new token pair.

    The presented refresh token is not revoked; both old and new refresh
    tokens stay valid until they expire.
    """
    try:
        result = await service.refresh(request.refresh_token)
    except AccountDisabledError as e:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"error": "Forbidden", "message": e.message},
        )
    except TokenRefreshError as e:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Token refresh failed", "message": e.message},
        )

    return auth_response(result)


@router.get(
    "/me",
    response_model=UserResponse,
    responses={401: {"description": "Missing, invalid or expired access token"}},
)
async def me(
    user_id: CurrentUserId,
    user_directory: Annotated[SQLAlchemyUserDirectory, Depends(get_user_directory)],
) -> UserResponse | JSONResponse:
    """Return the user identified by the bearer access token."""
    user = await user_directory.find_by_id(user_id)
    if user is None:
        logger.info("Current user lookup failed: user not found", user_id=user_id)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": "Authentication failed", "message": "User not found"},
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_response(user)
