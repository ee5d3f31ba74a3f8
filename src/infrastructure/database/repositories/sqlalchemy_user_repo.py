"""SQLAlchemy implementation of User repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from domain.entities.profile import Profile, UserWithProfile
from domain.entities.user import User
from infrastructure.database.models import ProfileModel, UserModel
from infrastructure.database.repositories.mappers import (
    profile_to_entity,
    profile_to_model,
    user_to_entity,
    user_to_model,
)


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return user_to_entity(model) if model else None

    async def get_by_username(self, username: str) -> User | None:
        """Get a user by exact (case-sensitive) username."""
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return user_to_entity(model) if model else None

    async def get_for_update(self, id: UUID) -> User | None:
        """Get a user by ID, locking the row until the transaction ends."""
        stmt = select(UserModel).where(UserModel.id == id).with_for_update()
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return user_to_entity(model) if model else None

    async def list_with_profiles(self) -> list[UserWithProfile]:
        """Get every user with its profile, oldest first."""
        stmt = (
            select(UserModel, ProfileModel)
            .join(ProfileModel, ProfileModel.user_id == UserModel.id)
            .order_by(UserModel.created_at, UserModel.username)
        )
        result = await self._session.execute(stmt)
        return [
            UserWithProfile(user=user_to_entity(user), profile=profile_to_entity(profile))
            for user, profile in result
        ]

    async def create_with_profile(self, user: User, profile: Profile) -> UserWithProfile:
        """Insert a user and its profile in the current transaction."""
        user_model = user_to_model(user)
        profile_model = profile_to_model(profile)
        self._session.add(user_model)
        self._session.add(profile_model)
        await self._session.flush()
        return UserWithProfile(
            user=user_to_entity(user_model),
            profile=profile_to_entity(profile_model),
        )

    async def set_active(self, id: UUID, is_active: bool) -> User | None:
        """Set the active flag and return the updated user."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        model.is_active = is_active
        await self._session.flush()
        return user_to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a user; the ORM cascade removes its profile."""
        stmt = (
            select(UserModel)
            .options(selectinload(UserModel.profile))
            .where(UserModel.id == id)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True
