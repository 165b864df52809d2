"""JWT token service.

Issues and validates access tokens and refresh tokens. The two token types
carry a ``type`` claim and are signed with different keys, so neither can be
accepted in place of the other.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from wrappedup.core.config import Settings, get_settings
from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.token import TokenCheck, TokenType
from wrappedup.domain.entities.user import User
from wrappedup.domain.ports import TokenIssuer

logger = get_logger(__name__)


class JWTService(TokenIssuer):
    """Service for creating and validating JWT tokens.

    Access tokens are short-lived and used per request; refresh tokens are
    long-lived and only accepted by the refresh flow.
    """

    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str | None = None,
        refresh_secret_key: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Key for signing access tokens. Defaults to settings.
            refresh_secret_key: Key for signing refresh tokens. Defaults to settings.
            settings: Settings instance. Defaults to ``get_settings()``.
        """
        self._settings = settings
        self._secret_key = secret_key
        self._refresh_secret_key = refresh_secret_key

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def _signing_key(self, token_type: TokenType) -> str:
        if token_type is TokenType.REFRESH:
            return self._refresh_secret_key or self.settings.effective_refresh_secret_key
        return self._secret_key or self.settings.secret_key

    def _encode(
        self,
        user: User,
        token_type: TokenType,
        expires_delta: timedelta,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "iss": self.settings.jwt_issuer,
            "sub": user.id,
            "iat": now,
            "exp": now + expires_delta,
            "jti": str(uuid.uuid4()),
            "type": token_type.value,
        }
        if extra_claims:
            payload.update(extra_claims)
        return jwt.encode(payload, self._signing_key(token_type), algorithm=self.ALGORITHM)

    def issue_access_token(self, user: User, expires_delta: timedelta | None = None) -> str:
        """Create an access token.

        Args:
            user: The user the token identifies.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.settings.access_token_expire_minutes)
        return self._encode(
            user,
            TokenType.ACCESS,
            expires_delta,
            {"username": str(user.username), "role": user.role.value},
        )

    def issue_refresh_token(self, user: User, expires_delta: timedelta | None = None) -> str:
        """Create a refresh token.

        Args:
            user: The user the token identifies.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT refresh token.
        """
        if expires_delta is None:
            expires_delta = timedelta(days=self.settings.refresh_token_expire_days)
        return self._encode(user, TokenType.REFRESH, expires_delta)

    def inspect(self, token: str, token_type: TokenType) -> TokenCheck:
        """Classify a token without raising.

        The signature is verified before expiry, so a forged token is INVALID
        even when its ``exp`` has passed.

        Args:
            token: The encoded JWT.
            token_type: The type the caller expects.

        Returns:
            TokenCheck with status VALID (and the subject id), EXPIRED or INVALID.
        """
        if not token:
            return TokenCheck.invalid()
        try:
            payload = jwt.decode(
                token,
                self._signing_key(token_type),
                algorithms=[self.ALGORITHM],
                issuer=self.settings.jwt_issuer,
                options={"require": ["exp", "sub", "type"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired", token_type=token_type.value)
            return TokenCheck.expired()
        except jwt.InvalidTokenError as e:
            logger.debug("Token rejected", token_type=token_type.value, reason=str(e))
            return TokenCheck.invalid()

        if payload.get("type") != token_type.value:
            logger.info(
                "Token type mismatch",
                expected=token_type.value,
                actual=payload.get("type"),
            )
            return TokenCheck.invalid()

        user_id = payload.get("sub")
        if not isinstance(user_id, str) or not user_id:
            logger.warning("Token has no subject")
            return TokenCheck.invalid()

        return TokenCheck.valid(user_id)

    def is_expired(self, token: str, token_type: TokenType = TokenType.REFRESH) -> bool:
        """Return True unless the token is currently valid (fails closed)."""
        return not self.inspect(token, token_type).is_valid

    def validate_and_extract_user_id(
        self, token: str, token_type: TokenType = TokenType.ACCESS
    ) -> str | None:
        """Return the subject id of a valid token, or None for any invalid input."""
        return self.inspect(token, token_type).user_id

    def access_token_expires_in(self) -> int:
        """Get the access token lifetime in seconds."""
        return int(timedelta(minutes=self.settings.access_token_expire_minutes).total_seconds())


# Default JWT service instance
jwt_service = JWTService()
