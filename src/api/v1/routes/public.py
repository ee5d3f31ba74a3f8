"""Public (unauthenticated) profile routes."""

from uuid import UUID

from fastapi import APIRouter, Depends

from api.v1.dependencies import get_public_profile_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.public import (
    LabelDetailResponse,
    LabelResponse,
    PublicProfileDetailResponse,
    PublicProfileResponse,
)
from domain.services.public_profile_service import PublicProfileService

router = APIRouter(prefix="/public/qr", tags=["public"])

_DENIALS = {
    403: {"model": ErrorResponse, "description": "Profile not published, or account inactive"},
    404: {"model": ErrorResponse, "description": "Profile not found"},
}


@router.get(
    "/{uuid}",
    response_model=PublicProfileDetailResponse,
    summary="Resolve a scanned profile",
    responses=_DENIALS,
)
async def resolve_profile(
    uuid: UUID,
    service: PublicProfileService = Depends(get_public_profile_service),
) -> PublicProfileDetailResponse:
    """Return the public view of a profile if it is published and its owner is active."""
    view = await service.resolve(uuid)
    return PublicProfileDetailResponse(
        data=PublicProfileResponse(
            uuid=view.uuid,
            name=view.name,
            bio=view.bio,
            avatar=view.avatar,
            social_links={platform.value: link for platform, link in view.social_links.items()},
            website=view.website,
        )
    )


@router.get(
    "/{uuid}/label",
    response_model=LabelDetailResponse,
    summary="Printable label data",
    responses=_DENIALS,
)
async def get_label(
    uuid: UUID,
    service: PublicProfileService = Depends(get_public_profile_service),
) -> LabelDetailResponse:
    """Return the owner's name and the scan URL the label's QR code encodes."""
    label = await service.resolve_label(uuid)
    return LabelDetailResponse(
        data=LabelResponse(uuid=label.uuid, name=label.name, scan_url=label.scan_url)
    )
