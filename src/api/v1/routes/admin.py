"""Administrator API routes."""

from dataclasses import replace
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import Response

from api.dependencies.auth import AdminUser
from api.v1.dependencies import get_admin_service, get_link_builder, get_qr_service
from api.v1.schemas.admin import (
    AdminUserDetailResponse,
    AdminUserListResponse,
    AdminUserResponse,
    ProfileSummary,
    QRAssetDetailResponse,
    QRAssetResponse,
    QRRegenerateRequest,
    UserCreate,
    UserDetailResponse,
    UserResponse,
)
from api.v1.schemas.common import ErrorResponse, MessageResponse
from domain.entities.profile import UserWithProfile
from domain.services.admin_service import AdminService
from domain.services.link_builder import LinkBuilder
from domain.services.qr_service import QRCodeService

router = APIRouter(prefix="/admin", tags=["admin"])


def _admin_user_response(owned: UserWithProfile, links: LinkBuilder) -> AdminUserResponse:
    user, profile = owned.user, owned.profile
    return AdminUserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        is_active=user.is_active,
        created_at=user.created_at,
        profile=ProfileSummary(
            uuid=profile.uuid,
            name=profile.name,
            is_published=profile.is_published,
            qr_code=profile.qr_asset.data_url if profile.qr_asset else None,
            edit_url=links.edit_url(profile.uuid),
            scan_url=links.scan_url(profile.uuid),
            label_url=links.label_url(profile.uuid),
        ),
    )


@router.get(
    "/users",
    response_model=AdminUserListResponse,
    summary="List all users",
)
async def list_users(
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
    links: LinkBuilder = Depends(get_link_builder),
) -> AdminUserListResponse:
    """Get every user with its profile summary, oldest first."""
    users = await service.list_users()
    return AdminUserListResponse(data=[_admin_user_response(owned, links) for owned in users])


@router.post(
    "/users",
    response_model=AdminUserDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={
        201: {"description": "User and profile created"},
        400: {"description": "Username or password missing"},
        409: {"model": ErrorResponse, "description": "Username already exists"},
    },
)
async def create_user(
    body: UserCreate,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
    links: LinkBuilder = Depends(get_link_builder),
) -> AdminUserDetailResponse:
    """Create a user with an unpublished profile and its first QR code."""
    owned = await service.create_user(body.username, body.password, body.email)
    return AdminUserDetailResponse(data=_admin_user_response(owned, links))


@router.put(
    "/users/{user_id}/toggle-status",
    response_model=UserDetailResponse,
    summary="Toggle a user's active flag",
    responses={
        200: {"description": "User status updated"},
        404: {"description": "User not found"},
    },
)
async def toggle_user_status(
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> UserDetailResponse:
    """Activate an inactive user or deactivate an active one."""
    user = await service.toggle_status(user_id)
    return UserDetailResponse(
        data=UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            is_active=user.is_active,
            created_at=user.created_at,
        )
    )


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
    responses={
        200: {"description": "User and profile deleted"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> MessageResponse:
    """Delete a user and its profile. This cannot be undone."""
    await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


@router.post(
    "/qr/{uuid}/regenerate",
    response_model=QRAssetDetailResponse,
    summary="Regenerate a QR code",
    responses={
        200: {"description": "QR code regenerated"},
        404: {"description": "Profile not found"},
    },
)
async def regenerate_qr(
    uuid: UUID,
    admin: AdminUser,
    body: QRRegenerateRequest | None = Body(None),
    service: AdminService = Depends(get_admin_service),
    qr_service: QRCodeService = Depends(get_qr_service),
) -> QRAssetDetailResponse:
    """Render a fresh QR image. It still encodes the profile's scan URL."""
    options = None
    if body is not None:
        overrides = body.model_dump(exclude_none=True)
        options = replace(qr_service.default_options, **overrides)

    asset = await service.regenerate_qr(uuid, options)
    return QRAssetDetailResponse(
        data=QRAssetResponse(
            uuid=uuid,
            payload=asset.payload,
            qr_code=asset.data_url,
            generated_at=asset.generated_at,
        )
    )


@router.get(
    "/qr/{uuid}/image.png",
    response_class=Response,
    summary="Download a QR code",
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG image"},
        404: {"description": "Profile not found"},
    },
)
async def download_qr(
    uuid: UUID,
    admin: AdminUser,
    service: AdminService = Depends(get_admin_service),
) -> Response:
    """Download the profile's QR code as a PNG attachment."""
    content, filename = await service.qr_image(uuid)
    return Response(
        content=content,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
