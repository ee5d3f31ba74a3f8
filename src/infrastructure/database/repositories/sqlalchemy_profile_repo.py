"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Platform, Profile, UserWithProfile
from infrastructure.database.models import ProfileModel, UserModel
from infrastructure.database.repositories.mappers import profile_to_entity, user_to_entity


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_uuid(self, uuid: UUID, for_update: bool = False) -> Profile | None:
        """Get a profile by its public uuid, optionally locking the row."""
        model = await self._get_model(uuid, for_update=for_update)
        return profile_to_entity(model) if model else None

    async def get_with_owner(self, uuid: UUID) -> UserWithProfile | None:
        """Get a profile together with the user that owns it."""
        stmt = (
            select(ProfileModel, UserModel)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .where(ProfileModel.uuid == uuid)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        profile_model, user_model = row
        return UserWithProfile(
            user=user_to_entity(user_model),
            profile=profile_to_entity(profile_model),
        )

    async def update(self, profile: Profile) -> Profile:
        """Persist every mutable field of an existing profile."""
        model = await self._get_model(profile.uuid)
        if not model:
            raise ValueError(f"Profile {profile.uuid} not found")

        model.name = profile.name
        model.bio = profile.bio
        model.avatar = profile.avatar
        for platform in Platform:
            setattr(model, platform.value, profile.social_handles.get(platform))
        model.website = profile.website
        model.is_published = profile.is_published

        asset = profile.qr_asset
        model.qr_code = asset.data_url if asset else None
        model.qr_payload = asset.payload if asset else None
        model.qr_generated_at = asset.generated_at if asset else None
        model.updated_at = profile.updated_at

        await self._session.flush()
        return profile_to_entity(model)

    async def _get_model(self, uuid: UUID, for_update: bool = False) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.uuid == uuid)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
