"""Service for exchanging a refresh token for a new token pair."""

from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.token import RefreshResult, TokenStatus, TokenType
from wrappedup.domain.exceptions import (
    AccountDisabledError,
    InvalidRefreshTokenError,
    RefreshTokenExpiredError,
    UserNotFoundError,
)
from wrappedup.domain.ports import TokenIssuer, UserDirectory

logger = get_logger(__name__)


class TokenRefreshService:
    """Validates a refresh token, reloads its user and rotates the token pair.

    Unlike login, failures here are reported distinctly: expired, invalid,
    user not found, account disabled.
    """

    def __init__(self, token_issuer: TokenIssuer, user_directory: UserDirectory) -> None:
        self.token_issuer = token_issuer
        self.user_directory = user_directory

    async def refresh(self, refresh_token: str) -> RefreshResult:
        """Issue a new access token and a new refresh token.

        Args:
            refresh_token: A refresh token previously issued to the user.

        Returns:
            RefreshResult with the user and the rotated token pair.

        Raises:
            RefreshTokenExpiredError: The token has expired. The user is not looked up.
            InvalidRefreshTokenError: The token is malformed, forged, or not a refresh token.
            UserNotFoundError: The token's subject no longer exists.
            AccountDisabledError: The token's subject is disabled.
        """
        if not refresh_token or not refresh_token.strip():
            raise InvalidRefreshTokenError()

        check = self.token_issuer.inspect(refresh_token, TokenType.REFRESH)
        if check.status is TokenStatus.EXPIRED:
            logger.info("Token refresh failed: token expired")
            raise RefreshTokenExpiredError()
        if not check.is_valid or not check.user_id:
            logger.info("Token refresh failed: invalid token")
            raise InvalidRefreshTokenError()

        user = await self.user_directory.find_by_id(check.user_id)
        if user is None:
            logger.info("Token refresh failed: user not found", user_id=check.user_id)
            raise UserNotFoundError()

        if not user.enabled:
            logger.info("Token refresh failed: account disabled", user_id=user.id)
            raise AccountDisabledError()

        access_token = self.token_issuer.issue_access_token(user)
        new_refresh_token = self.token_issuer.issue_refresh_token(user)

        logger.info("Token refreshed", user_id=user.id)
        return RefreshResult(
            user=user, access_token=access_token, refresh_token=new_refresh_token
        )
