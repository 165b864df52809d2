"""Abstract ports the identity services depend on.

Concrete implementations live in ``wrappedup.infrastructure``; tests
substitute mocks.
"""

from abc import ABC, abstractmethod

from wrappedup.domain.entities.token import TokenCheck, TokenType
from wrappedup.domain.entities.user import Email, User, Username


class UserDirectory(ABC):
    """Durable store of user identities.

    Implementations must enforce username and email uniqueness atomically and
    raise ``DuplicateUserError`` from ``save`` when a write loses a race.
    """

    @abstractmethod
    async def find_by_id(self, user_id: str) -> User | None:
        ...

    @abstractmethod
    async def find_by_username(self, username: Username) -> User | None:
        ...

    @abstractmethod
    async def find_by_email(self, email: Email) -> User | None:
        ...

    @abstractmethod
    async def exists_by_username(self, username: Username) -> bool:
        ...

    @abstractmethod
    async def exists_by_email(self, email: Email) -> bool:
        ...

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert or update a user and make the write durable."""
        ...


class ProfileCreator(ABC):
    """Creates the companion profile record of a newly registered user."""

    @abstractmethod
    async def create_profile(self, user_id: str) -> None:
        ...


class PasswordHasher(ABC):
    """One-way password hashing."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        ...

    @abstractmethod
    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return True iff ``plaintext`` matches ``hashed``. Never raises on mismatch."""
        ...

    @property
    @abstractmethod
    def dummy_hash(self) -> str:
        """A valid hash of an unguessable value, for timing equalisation."""
        ...


class TokenIssuer(ABC):
    """Issues and validates signed, self-contained tokens."""

    @abstractmethod
    def issue_access_token(self, user: User) -> str:
        ...

    @abstractmethod
    def issue_refresh_token(self, user: User) -> str:
        ...

    @abstractmethod
    def inspect(self, token: str, token_type: TokenType) -> TokenCheck:
        """Classify a token as valid, expired or invalid. Never raises."""
        ...

    @abstractmethod
    def is_expired(self, token: str, token_type: TokenType = TokenType.REFRESH) -> bool:
        ...

    @abstractmethod
    def validate_and_extract_user_id(
        self, token: str, token_type: TokenType = TokenType.ACCESS
    ) -> str | None:
        ...
