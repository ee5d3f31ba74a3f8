"""QR renderer backed by the ``qrcode`` library."""

import io

import qrcode
import qrcode.constants
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage

from domain.entities.qr import ErrorCorrection, ImageFormat, QRRenderOptions

_ERROR_CORRECTION = {
    ErrorCorrection.L: qrcode.constants.ERROR_CORRECT_L,
    ErrorCorrection.M: qrcode.constants.ERROR_CORRECT_M,
    ErrorCorrection.Q: qrcode.constants.ERROR_CORRECT_Q,
    ErrorCorrection.H: qrcode.constants.ERROR_CORRECT_H,
}


class QRCodeRenderer:
    """Render PNG (Pillow) or SVG QR codes."""

    def render(self, payload: str, options: QRRenderOptions) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=_ERROR_CORRECTION[options.error_correction],
            box_size=options.box_size,
            border=options.border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        buf = io.BytesIO()
        if options.image_format is ImageFormat.SVG:
            # SVG output is monochrome; colors only apply to raster images
            qr.make_image(image_factory=SvgPathImage).save(buf)
        else:
            img = qr.make_image(
                image_factory=PilImage,
                fill_color=options.fill_color,
                back_color=options.back_color,
            )
            img.save(buf, format="PNG")
        return buf.getvalue()
