"""Conversions between ORM models and domain entities."""

from domain.entities.profile import Platform, Profile
from domain.entities.qr import QRAsset
from domain.entities.user import User
from infrastructure.database.models import ProfileModel, UserModel


def user_to_entity(model: UserModel) -> User:
    """Convert ORM model to domain entity."""
    return User(
        id=model.id,
        username=model.username,
        password_hash=model.password_hash,
        email=model.email,
        is_active=model.is_active,
        created_at=model.created_at,
    )


def user_to_model(entity: User) -> UserModel:
    """Convert domain entity to ORM model."""
    return UserModel(
        id=entity.id,
        username=entity.username,
        password_hash=entity.password_hash,
        email=entity.email,
        is_active=entity.is_active,
        created_at=entity.created_at,
    )


def profile_to_entity(model: ProfileModel) -> Profile:
    """Convert ORM model to domain entity."""
    asset = None
    if model.qr_code and model.qr_payload:
        asset = QRAsset(
            payload=model.qr_payload,
            data_url=model.qr_code,
            generated_at=model.qr_generated_at or model.updated_at,
        )
    return Profile(
        uuid=model.uuid,
        user_id=model.user_id,
        name=model.name,
        bio=model.bio,
        avatar=model.avatar,
        social_handles={platform: getattr(model, platform.value) for platform in Platform},
        website=model.website,
        is_published=model.is_published,
        qr_asset=asset,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def profile_to_model(entity: Profile) -> ProfileModel:
    """Convert domain entity to ORM model."""
    asset = entity.qr_asset
    return ProfileModel(
        uuid=entity.uuid,
        user_id=entity.user_id,
        name=entity.name,
        bio=entity.bio,
        avatar=entity.avatar,
        website=entity.website,
        is_published=entity.is_published,
        qr_code=asset.data_url if asset else None,
        qr_payload=asset.payload if asset else None,
        qr_generated_at=asset.generated_at if asset else None,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
        **{platform.value: entity.social_handles.get(platform) for platform in Platform},
    )
