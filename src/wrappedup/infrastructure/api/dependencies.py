"""FastAPI dependencies for services and authentication.

Services are built per request around the request's database session.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wrappedup.core.config import get_settings
from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.token import TokenType
from wrappedup.domain.services import (
    AuthenticationService,
    PasswordValidator,
    RegistrationService,
    TokenRefreshService,
)
from wrappedup.infrastructure.auth import jwt_service, password_hasher
from wrappedup.infrastructure.persistence.database import get_db_session
from wrappedup.infrastructure.persistence.repositories import (
    SQLAlchemyUserDirectory,
    UserProfileRepository,
)

logger = get_logger(__name__)

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_user_directory(session: DbSession) -> SQLAlchemyUserDirectory:
    return SQLAlchemyUserDirectory(session)


def get_password_validator() -> PasswordValidator:
    return PasswordValidator(min_length=get_settings().password_min_length)


def get_registration_service(session: DbSession) -> RegistrationService:
    return RegistrationService(
        user_directory=SQLAlchemyUserDirectory(session),
        password_hasher=password_hasher,
        profile_creator=UserProfileRepository(session),
    )


def get_authentication_service(session: DbSession) -> AuthenticationService:
    return AuthenticationService(
        user_directory=SQLAlchemyUserDirectory(session),
        password_hasher=password_hasher,
        token_issuer=jwt_service,
    )


def get_token_refresh_service(session: DbSession) -> TokenRefreshService:
    return TokenRefreshService(
        token_issuer=jwt_service,
        user_directory=SQLAlchemyUserDirectory(session),
    )


async def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Extract and validate the user id from the Authorization header.

    Only the access token is checked; the user directory is not consulted.

    Args:
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        The id of the user the access token was issued to.

    Raises:
        HTTPException: 401 if the header is missing, malformed, or the token
            is not a valid access token.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = jwt_service.validate_and_extract_user_id(parts[1], TokenType.ACCESS)
    if user_id is None:
        logger.info("Authentication failed: invalid or expired access token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
