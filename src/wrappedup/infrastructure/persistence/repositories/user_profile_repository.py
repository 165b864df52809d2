"""Repository creating the companion profile of a new user."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wrappedup.domain.ports import ProfileCreator
from wrappedup.infrastructure.persistence.models import UserProfileModel


class UserProfileRepository(ProfileCreator):
    """Repository for user profile database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create_profile(self, user_id: str) -> None:
        """Create an empty public profile for a user and commit.

        The session is rolled back on failure; the user row, committed
        beforehand, is unaffected.

        Args:
            user_id: ID of the user the profile belongs to.
        """
        profile = UserProfileModel(
            id=str(uuid.uuid4()),
            user_id=user_id,
            is_public_profile=True,
        )
        self.session.add(profile)
        try:
            await self.session.flush()
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def get_by_user_id(self, user_id: str) -> UserProfileModel | None:
        """Get the profile of a user.

        Args:
            user_id: Owning user ID.

        Returns:
            Profile model if found, None otherwise.
        """
        result = await self.session.execute(
            select(UserProfileModel).where(UserProfileModel.user_id == user_id)
        )
        return result.scalar_one_or_none()
