"""Token-related value types.

Tokens themselves are opaque strings; these types describe what a token is
for, what checking one produced, and what the services hand back.
"""

from dataclasses import dataclass
from enum import Enum

from wrappedup.domain.entities.user import User
from wrappedup.domain.exceptions import DomainValidationError


class TokenType(str, Enum):
    """Purpose of a signed token."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenStatus(str, Enum):
    """Outcome of inspecting a token."""

    VALID = "valid"
    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenCheck:
    """Result of inspecting a token.

    ``user_id`` is set only when ``status`` is VALID.
    """

    status: TokenStatus
    user_id: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID

    @classmethod
    def valid(cls, user_id: str) -> "TokenCheck":
        return cls(TokenStatus.VALID, user_id)

    @classmethod
    def expired(cls) -> "TokenCheck":
        return cls(TokenStatus.EXPIRED)

    @classmethod
    def invalid(cls) -> "TokenCheck":
        return cls(TokenStatus.INVALID)


@dataclass(frozen=True)
class TokenPairResult:
    """A user together with a freshly issued access/refresh token pair.

    All three fields are mandatory; blank tokens are rejected.
    """

    user: User
    access_token: str
    refresh_token: str

    def __post_init__(self) -> None:
        if self.user is None:
            raise DomainValidationError("User cannot be null")
        if not self.access_token or not self.access_token.strip():
            raise DomainValidationError("Access token cannot be null or blank")
        if not self.refresh_token or not self.refresh_token.strip():
            raise DomainValidationError("Refresh token cannot be null or blank")


class AuthenticationResult(TokenPairResult):
    """Returned by a successful login."""


class RefreshResult(TokenPairResult):
    """Returned by a successful token refresh."""
