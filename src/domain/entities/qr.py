"""QR code value objects."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class ImageFormat(StrEnum):
    """Supported QR image encodings."""

    PNG = "png"
    SVG = "svg"


class ErrorCorrection(StrEnum):
    """QR error correction levels, lowest to highest redundancy."""

    L = "L"
    M = "M"
    Q = "Q"
    H = "H"


@dataclass(frozen=True, slots=True)
class QRRenderOptions:
    """How a QR image is drawn. Never affects what it encodes."""

    box_size: int = 10
    border: int = 4
    error_correction: ErrorCorrection = ErrorCorrection.M
    fill_color: str = "#000000"
    back_color: str = "#FFFFFF"
    image_format: ImageFormat = ImageFormat.PNG


@dataclass(frozen=True, slots=True)
class QRAsset:
    """A rendered QR image together with the payload it encodes."""

    payload: str
    data_url: str = field(repr=False)
    generated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def media_type(self) -> str:
        """MIME type parsed from the data URL header."""
        header = self.data_url.split(",", 1)[0]
        return header.removeprefix("data:").split(";", 1)[0]
