"""Service for registering new users.

Handles uniqueness checks, password hashing, persistence of the new identity,
and best-effort creation of the companion profile.
"""

from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.user import Email, User, Username
from wrappedup.domain.exceptions import (
    DomainValidationError,
    DuplicateUserError,
    EmailExistsError,
    UserAlreadyExistsError,
    UsernameExistsError,
)
from wrappedup.domain.ports import PasswordHasher, ProfileCreator, UserDirectory

logger = get_logger(__name__)


class RegistrationService:
    """Creates new user identities."""

    def __init__(
        self,
        user_directory: UserDirectory,
        password_hasher: PasswordHasher,
        profile_creator: ProfileCreator | None = None,
    ) -> None:
        """Initialize the registration service.

        Args:
            user_directory: Store of user identities.
            password_hasher: Hasher for the plaintext password.
            profile_creator: Optional creator of the companion profile.
        """
        self.user_directory = user_directory
        self.password_hasher = password_hasher
        self.profile_creator = profile_creator

    async def register(self, username: str, email: str, password: str) -> str:
        """Register a new user.

        Flow:
        1. Build the username and email value objects (fails before any I/O)
        2. Reject a taken username
        3. Reject a taken email
        4. Hash the password
        5. Create and save the user (role USER, enabled)
        6. Create the profile, ignoring failures
        7. Return the new user ID

        Args:
            username: Requested username (3 to 50 characters).
            email: Email address.
            password: Plaintext password.

        Returns:
            The ID of the newly registered user.

        Raises:
            DomainValidationError: If any input is malformed or blank.
            UsernameExistsError: If the username is taken.
            EmailExistsError: If the email is taken.
        """
        username_vo = Username(username)
        email_vo = Email(email)
        if password is None or not password.strip():
            raise DomainValidationError("Password cannot be blank", field="password")

        if await self.user_directory.exists_by_username(username_vo):
            logger.info("Registration rejected: username exists", username=username_vo.value)
            raise UsernameExistsError()

        if await self.user_directory.exists_by_email(email_vo):
            logger.info("Registration rejected: email exists", username=username_vo.value)
            raise EmailExistsError()

        password_hash = self.password_hasher.hash(password)
        user = User.create_new(username_vo, email_vo, password_hash)

        try:
            saved = await self.user_directory.save(user)
        except DuplicateUserError as e:
            logger.info(
                "Registration rejected: storage uniqueness violation",
                username=username_vo.value,
                field=e.field,
            )
            raise await self._conflict_for(e, username_vo) from e

        logger.info("User registered", user_id=saved.id, username=saved.username.value)

        await self._create_profile(saved.id)
        return saved.id

    async def _conflict_for(
        self, error: DuplicateUserError, username: Username
    ) -> UserAlreadyExistsError:
        if error.field == "username":
            return UsernameExistsError()
        if error.field == "email":
            return EmailExistsError()
        if await self.user_directory.exists_by_username(username):
            return UsernameExistsError()
        return EmailExistsError()

    async def _create_profile(self, user_id: str) -> None:
        if self.profile_creator is None:
            return
        try:
            await self.profile_creator.create_profile(user_id)
            logger.info("Profile created", user_id=user_id)
        except Exception as e:
            # Registration has already succeeded and must not be undone.
            logger.error(
                "Failed to create profile for user",
                user_id=user_id,
                error=str(e),
                exc_type=type(e).__name__,
                exc_info=True,
            )
