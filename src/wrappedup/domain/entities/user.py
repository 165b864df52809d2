"""User identity entity and its value objects.

A user is the authenticatable identity behind every review, wishlist and
profile. Username and email are globally unique; email is always stored
lowercase.
"""

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wrappedup.domain.exceptions import DomainValidationError

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9_+&*-]+(?:\.[a-zA-Z0-9_+&*-]+)*@(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,7}$"
)
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    """User roles in the system."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Email:
    """Email address value object, normalised to lowercase."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise DomainValidationError("Email cannot be blank", field="email")
        if not EMAIL_PATTERN.fullmatch(self.value):
            raise DomainValidationError("Invalid email format", field="email")
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Username:
    """Username value object."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise DomainValidationError("Username cannot be blank", field="username")
        if not USERNAME_MIN_LENGTH <= len(self.value) <= USERNAME_MAX_LENGTH:
            raise DomainValidationError(
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters",
                field="username",
            )

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class User:
    """User identity.

    Attributes:
        id: Unique identifier (UUID string).
        username: Unique username.
        email: Unique, lowercase email address.
        password_hash: Hashed password (never the plaintext).
        role: USER or ADMIN.
        enabled: Whether the user may authenticate and refresh tokens.
        created_at: Timestamp when the user was created.
        updated_at: Timestamp when the user was last modified.
    """

    id: str
    username: Username
    email: Email
    password_hash: str
    role: Role = Role.USER
    enabled: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        """Validate user data after initialization."""
        if not self.id:
            raise ValueError("User ID is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")

    @classmethod
    def create_new(cls, username: Username, email: Email, password_hash: str) -> "User":
        """Create a brand-new enabled USER with a generated ID."""
        now = _utcnow()
        return cls(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=password_hash,
            role=Role.USER,
            enabled=True,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def update_password(self, new_password_hash: str) -> None:
        if not new_password_hash:
            raise ValueError("Password hash is required")
        self.password_hash = new_password_hash
        self._touch()

    def disable(self) -> None:
        self.enabled = False
        self._touch()

    def enable(self) -> None:
        self.enabled = True
        self._touch()

    def grant_admin_role(self) -> None:
        self.role = Role.ADMIN
        self._touch()

    def revoke_admin_role(self) -> None:
        self.role = Role.USER
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _utcnow()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, username={self.username}, email={self.email}, "
            f"role={self.role.value}, enabled={self.enabled})>"
        )
