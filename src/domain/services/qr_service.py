"""QR code issuance for profile scan URLs."""

import asyncio
import base64
from collections.abc import Callable
from typing import Optional
from uuid import UUID

from core.exceptions import ProfileNotFoundError
from domain.entities.qr import ImageFormat, QRAsset, QRRenderOptions
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.link_builder import LinkBuilder
from infrastructure.qr.provider import IQRRenderer

_MEDIA_TYPES = {
    ImageFormat.PNG: "image/png",
    ImageFormat.SVG: "image/svg+xml",
}


class QRCodeService:
    """Derive QR assets from a profile's uuid.

    Reads profiles but never writes them; callers persist the returned asset.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        links: LinkBuilder,
        renderer: IQRRenderer,
        default_options: Optional[QRRenderOptions] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._links = links
        self._renderer = renderer
        self._default_options = default_options or QRRenderOptions()

    @property
    def default_options(self) -> QRRenderOptions:
        return self._default_options

    def payload_for(self, uuid: UUID) -> str:
        """The text every QR code for this profile encodes."""
        return self._links.scan_url(uuid)

    async def issue(self, uuid: UUID) -> QRAsset:
        """Return the profile's current asset, rendering one only when needed.

        A stored asset is reused as long as it still encodes the scan URL.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get_by_uuid(uuid)
            if not profile:
                raise ProfileNotFoundError(str(uuid))

        payload = self.payload_for(uuid)
        if profile.qr_asset is not None and profile.qr_asset.payload == payload:
            return profile.qr_asset
        return await self._render(payload, self._default_options)

    async def reissue(self, uuid: UUID, options: Optional[QRRenderOptions] = None) -> QRAsset:
        """Render a fresh image. The payload is the same one ``issue`` uses."""
        await self._require_profile(uuid)
        return await self._render(self.payload_for(uuid), options or self._default_options)

    async def render_png(self, uuid: UUID) -> bytes:
        """Raw PNG bytes for the profile's scan URL."""
        await self._require_profile(uuid)
        options = QRRenderOptions(
            box_size=self._default_options.box_size,
            border=self._default_options.border,
            error_correction=self._default_options.error_correction,
        )
        return await asyncio.to_thread(self._renderer.render, self.payload_for(uuid), options)

    async def _require_profile(self, uuid: UUID) -> None:
        async with self._uow_factory() as uow:
            if not await uow.profiles.get_by_uuid(uuid):
                raise ProfileNotFoundError(str(uuid))

    async def _render(self, payload: str, options: QRRenderOptions) -> QRAsset:
        content = await asyncio.to_thread(self._renderer.render, payload, options)
        encoded = base64.b64encode(content).decode("ascii")
        return QRAsset(
            payload=payload,
            data_url=f"data:{_MEDIA_TYPES[options.image_format]};base64,{encoded}",
        )
