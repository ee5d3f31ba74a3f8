"""QR renderer protocol."""

from typing import Protocol

from domain.entities.qr import QRRenderOptions


class IQRRenderer(Protocol):
    """Protocol for turning a payload string into QR image bytes."""

    def render(self, payload: str, options: QRRenderOptions) -> bytes:
        """
        Render a QR code.

        Args:
            payload: The text the code encodes
            options: Drawing parameters (size, colors, format)

        Returns:
            Encoded image bytes in ``options.image_format``
        """
        ...
