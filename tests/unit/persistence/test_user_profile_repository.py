"""Unit tests for UserProfileRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from wrappedup.infrastructure.persistence.repositories import (
    SQLAlchemyUserDirectory,
    UserProfileRepository,
)


@pytest.mark.asyncio
async def test_create_profile(db_session, make_user):
    user = make_user()
    await SQLAlchemyUserDirectory(db_session).save(user)
    repo = UserProfileRepository(db_session)

    await repo.create_profile(user.id)

    profile = await repo.get_by_user_id(user.id)
    assert profile is not None
    assert profile.user_id == user.id
    assert profile.is_public_profile is True
    assert profile.full_name is None
    assert profile.bio is None


@pytest.mark.asyncio
async def test_get_missing_profile(db_session):
    assert await UserProfileRepository(db_session).get_by_user_id("missing") is None


@pytest.mark.asyncio
async def test_second_profile_rejected_and_user_kept(db_session, make_user):
    user = make_user()
    directory = SQLAlchemyUserDirectory(db_session)
    await directory.save(user)
    repo = UserProfileRepository(db_session)
    await repo.create_profile(user.id)

    with pytest.raises(IntegrityError):
        await repo.create_profile(user.id)

    assert await directory.find_by_id(user.id) == user
