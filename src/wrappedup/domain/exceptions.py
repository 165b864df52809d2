"""Business-rule exceptions raised by the identity domain.

Infrastructure failures (database, hashing primitive) are never wrapped in
these types; they propagate as-is.
"""

USERNAME_EXISTS_MESSAGE = "A user with this username already exists"
EMAIL_EXISTS_MESSAGE = "A user with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class WrappedUpError(Exception):
    """Base class for caller-visible domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(WrappedUpError, ValueError):
    """Raised when a value object or command is constructed from bad input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class UserAlreadyExistsError(WrappedUpError):
    """Raised when registration collides with an existing user."""

    field: str = ""


class UsernameExistsError(UserAlreadyExistsError):
    """The requested username is taken."""

    field = "username"

    def __init__(self) -> None:
        super().__init__(USERNAME_EXISTS_MESSAGE)


class EmailExistsError(UserAlreadyExistsError):
    """The requested email is taken."""

    field = "email"

    def __init__(self) -> None:
        super().__init__(EMAIL_EXISTS_MESSAGE)


class InvalidCredentialsError(WrappedUpError):
    """Raised for every authentication denial.

    Unknown email, disabled account and wrong password all produce this same
    error with the same message.
    """

    def __init__(self) -> None:
        super().__init__(INVALID_CREDENTIALS_MESSAGE)


class TokenRefreshError(WrappedUpError):
    """Base class for refresh failures."""

    pass


class RefreshTokenExpiredError(TokenRefreshError):
    """The presented refresh token has expired."""

    def __init__(self) -> None:
        super().__init__("Refresh token is expired")


class InvalidRefreshTokenError(TokenRefreshError):
    """The presented refresh token is malformed, forged, or not a refresh token."""

    def __init__(self) -> None:
        super().__init__("Invalid refresh token")


class UserNotFoundError(TokenRefreshError):
    """The user referenced by a valid token no longer exists."""

    def __init__(self) -> None:
        super().__init__("User not found")


class AccountDisabledError(TokenRefreshError):
    """The user referenced by a valid token is disabled."""

    def __init__(self) -> None:
        super().__init__("User account is disabled")


class DuplicateUserError(Exception):
    """Raised by a user directory when storage rejects a write as a duplicate.

    Attributes:
        field: 'username' or 'email' when the violated constraint is known,
            otherwise None.
    """

    def __init__(self, field: str | None = None) -> None:
        self.field = field
        super().__init__(f"Duplicate user ({field or 'unknown field'})")
