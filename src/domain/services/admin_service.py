"""Administrator lifecycle operations."""

import re
from typing import Optional
from uuid import UUID

import structlog

from domain.entities.profile import ProfilePatch, UserWithProfile
from domain.entities.qr import QRAsset, QRRenderOptions
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from domain.services.qr_service import QRCodeService

logger = structlog.get_logger()


class AdminService:
    """Orchestrates profile and QR services for administrator actions.

    Callers are expected to have authorized the administrator already.
    """

    def __init__(self, profiles: ProfileService, qr_codes: QRCodeService) -> None:
        self._profiles = profiles
        self._qr_codes = qr_codes

    async def create_user(
        self,
        username: str,
        password: str,
        email: str | None = None,
    ) -> UserWithProfile:
        """Provision a user + profile and store its first QR asset."""
        created = await self._profiles.create_user_with_profile(username, password, email)
        uuid = created.profile.uuid

        asset = await self._qr_codes.issue(uuid)
        profile = await self._profiles.update_profile(uuid, _asset_patch(asset, uuid))
        return UserWithProfile(user=created.user, profile=profile)

    async def list_users(self) -> list[UserWithProfile]:
        """Every user with its profile, oldest first."""
        return await self._profiles.list_all()

    async def toggle_status(self, user_id: UUID) -> User:
        """Flip a user's active flag."""
        user = await self._profiles.toggle_active(user_id)
        logger.info("user_status_toggled", user_id=str(user_id), is_active=user.is_active)
        return user

    async def delete_user(self, user_id: UUID) -> None:
        """Delete a user and its profile. The only path that destroys a profile."""
        await self._profiles.delete_user(user_id)
        logger.info("user_deleted", user_id=str(user_id))

    async def regenerate_qr(
        self,
        uuid: UUID,
        options: Optional[QRRenderOptions] = None,
    ) -> QRAsset:
        """Force a fresh QR image and persist it on the profile."""
        asset = await self._qr_codes.reissue(uuid, options)
        await self._profiles.update_profile(uuid, _asset_patch(asset, uuid))
        logger.info("qr_regenerated", uuid=str(uuid))
        return asset

    async def qr_image(self, uuid: UUID) -> tuple[bytes, str]:
        """PNG bytes of the profile's QR code plus a download filename."""
        owned = await self._profiles.get_owner_view(uuid)
        content = await self._qr_codes.render_png(uuid)
        safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", owned.user.username)
        return content, f"qr-{safe_name}.png"


def _asset_patch(asset: QRAsset, uuid: UUID) -> ProfilePatch:
    return ProfilePatch.from_mapping({"qr_asset": asset}, target_uuid=uuid)
