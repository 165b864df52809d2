"""Repository implementations for WrappedUp persistence."""

from wrappedup.infrastructure.persistence.repositories.user_profile_repository import (
    UserProfileRepository,
)
from wrappedup.infrastructure.persistence.repositories.user_repository import (
    SQLAlchemyUserDirectory,
)

__all__ = [
    "SQLAlchemyUserDirectory",
    "UserProfileRepository",
]
