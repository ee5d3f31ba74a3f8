"""Owner-facing profile API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from api.v1.dependencies import get_link_builder, get_profile_service
from api.v1.schemas.profile import (
    OwnerProfileDetailResponse,
    OwnerProfileResponse,
    ProfileDetailResponse,
    ProfileOwner,
    ProfileResponse,
    ProfileUpdate,
)
from domain.entities.profile import Platform, Profile
from domain.services.link_builder import LinkBuilder
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/qr", tags=["profiles"])


def profile_fields(profile: Profile) -> dict:
    """Flatten a profile entity into response fields."""
    asset = profile.qr_asset
    return {
        "uuid": profile.uuid,
        "name": profile.name,
        "bio": profile.bio,
        "avatar": profile.avatar,
        **{platform.value: profile.social_handles.get(platform) for platform in Platform},
        "website": profile.website,
        "is_published": profile.is_published,
        "qr_code": asset.data_url if asset else None,
        "qr_generated_at": asset.generated_at if asset else None,
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


@router.get(
    "/{uuid}",
    response_model=OwnerProfileDetailResponse,
    summary="Get a profile for editing",
    responses={
        200: {"description": "Profile with its owner's account state"},
        404: {"description": "Profile not found"},
    },
)
async def get_profile(
    uuid: UUID,
    service: ProfileService = Depends(get_profile_service),
    links: LinkBuilder = Depends(get_link_builder),
) -> OwnerProfileDetailResponse:
    """Get the full profile plus the owner's username and active flag."""
    owned = await service.get_owner_view(uuid)
    return OwnerProfileDetailResponse(
        data=OwnerProfileResponse(
            **profile_fields(owned.profile),
            user=ProfileOwner(
                username=owned.user.username,
                is_active=owned.user.is_active,
            ),
            edit_url=links.edit_url(uuid),
            scan_url=links.scan_url(uuid),
        )
    )


@router.put(
    "/{uuid}",
    response_model=ProfileDetailResponse,
    summary="Update a profile",
    responses={
        200: {"description": "Profile updated successfully"},
        401: {"description": "Invalid username or password"},
        404: {"description": "Profile not found"},
        422: {"description": "Unknown or read-only field in the body"},
    },
)
async def update_profile(
    uuid: UUID,
    body: ProfileUpdate,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Update display, social and publish fields. Credentials are checked on every call."""
    profile = await service.edit_as_owner(
        uuid,
        username=body.username,
        password=body.password,
        changes=body.changes(),
    )
    return ProfileDetailResponse(data=ProfileResponse(**profile_fields(profile)))
