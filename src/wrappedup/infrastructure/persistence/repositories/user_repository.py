"""SQLAlchemy implementation of the user directory."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wrappedup.core.logging import get_logger
from wrappedup.domain.entities.user import Email, Role, User, Username
from wrappedup.domain.exceptions import DuplicateUserError
from wrappedup.domain.ports import UserDirectory
from wrappedup.infrastructure.persistence.models import UserModel
from wrappedup.infrastructure.persistence.models.user import (
    EMAIL_CONSTRAINT,
    USERNAME_CONSTRAINT,
)

logger = get_logger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _violated_field(error: IntegrityError) -> str | None:
    message = str(error.orig) if error.orig is not None else str(error)
    if USERNAME_CONSTRAINT in message or "users.username" in message:
        return "username"
    if EMAIL_CONSTRAINT in message or "users.email" in message:
        return "email"
    return None


class SQLAlchemyUserDirectory(UserDirectory):
    """User directory backed by the users table."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def to_entity(model: UserModel) -> User:
        """Convert a row into a domain user."""
        return User(
            id=model.id,
            username=Username(model.username),
            email=Email(model.email),
            password_hash=model.password_hash,
            role=Role(model.role),
            enabled=model.enabled,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    async def _get_model(self, user_id: str) -> UserModel | None:
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str) -> User | None:
        model = await self._get_model(user_id)
        return self.to_entity(model) if model is not None else None

    async def find_by_username(self, username: Username) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username.value)
        )
        model = result.scalar_one_or_none()
        return self.to_entity(model) if model is not None else None

    async def find_by_email(self, email: Email) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email.value)
        )
        model = result.scalar_one_or_none()
        return self.to_entity(model) if model is not None else None

    async def exists_by_username(self, username: Username) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.username == username.value).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def exists_by_email(self, email: Email) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email.value).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def save(self, user: User) -> User:
        """Insert or update a user and commit.

        Args:
            user: Domain user to persist.

        Returns:
            The persisted user.

        Raises:
            DuplicateUserError: If a unique constraint rejects the write.
        """
        model = await self._get_model(user.id)
        if model is None:
            model = UserModel(id=user.id, created_at=user.created_at)
            self.session.add(model)

        model.username = user.username.value
        model.email = user.email.value
        model.password_hash = user.password_hash
        model.role = user.role.value
        model.enabled = user.enabled
        model.updated_at = user.updated_at

        try:
            await self.session.flush()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            field = _violated_field(e)
            logger.info("User write rejected by unique constraint", field=field)
            raise DuplicateUserError(field) from e

        return user
