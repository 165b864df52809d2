"""Service for email/password authentication.

Every denial (unknown email, disabled account, wrong password) is reported
to the caller as the same ``InvalidCredentialsError``.
"""

from enum import Enum

from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.token import AuthenticationResult
from wrappedup.domain.entities.user import Email, User
from wrappedup.domain.exceptions import DomainValidationError, InvalidCredentialsError
from wrappedup.domain.ports import PasswordHasher, TokenIssuer, UserDirectory

logger = get_logger(__name__)


class CredentialCheck(str, Enum):
    """Internal outcome of checking a set of credentials."""

    OK = "ok"
    NOT_FOUND = "not_found"
    DISABLED = "disabled"
    WRONG_PASSWORD = "wrong_password"


class AuthenticationService:
    """Verifies credentials and issues a token pair."""

    def __init__(
        self,
        user_directory: UserDirectory,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self.user_directory = user_directory
        self.password_hasher = password_hasher
        self.token_issuer = token_issuer

    async def authenticate(self, email: str, password: str) -> AuthenticationResult:
        """Authenticate a user by email and password.

        Args:
            email: Email address (any case).
            password: Plaintext password.

        Returns:
            AuthenticationResult with the user and a new access/refresh token pair.

        Raises:
            DomainValidationError: If the email is malformed or a field is blank.
            InvalidCredentialsError: For every authentication denial.
        """
        email_vo = Email(email)
        if password is None or not password.strip():
            raise DomainValidationError("Password cannot be blank", field="password")

        outcome, user = await self._check_credentials(email_vo, password)
        if outcome is not CredentialCheck.OK:
            logger.info("Authentication failed", reason=outcome.value)
            raise InvalidCredentialsError()

        access_token = self.token_issuer.issue_access_token(user)
        refresh_token = self.token_issuer.issue_refresh_token(user)

        logger.info("User authenticated", user_id=user.id)
        return AuthenticationResult(
            user=user, access_token=access_token, refresh_token=refresh_token
        )

    async def _check_credentials(
        self, email: Email, password: str
    ) -> tuple[CredentialCheck, User | None]:
        user = await self.user_directory.find_by_email(email)

        if user is None:
            # Timing matches a wrong-password attempt
            self.password_hasher.verify(password, self.password_hasher.dummy_hash)
            return CredentialCheck.NOT_FOUND, None

        if not user.enabled:
            self.password_hasher.verify(password, self.password_hasher.dummy_hash)
            return CredentialCheck.DISABLED, user

        if not self.password_hasher.verify(password, user.password_hash):
            return CredentialCheck.WRONG_PASSWORD, user

        return CredentialCheck.OK, user
