"""Image format detection from magic bytes."""

from enum import Enum
from typing import Final

from focuspoint.errors import UnsupportedFormatError


class ImageFormat(str, Enum):
    """Image formats recognized by their leading bytes."""

    GIF = "gif"
    TIFF = "tiff"
    JPEG = "jpeg"
    BMP = "bmp"
    ICO = "ico"
    PNG = "png"
    SVG = "svg"
    UNKNOWN = "unknown"

    @property
    def mimetype(self) -> str | None:
        """Mimetype string, or None for UNKNOWN."""
        if self is ImageFormat.UNKNOWN:
            return None
        return f"image/{self.value}"

    @property
    def pillow_format(self) -> str:
        """Format name passed to Pillow when encoding."""
        return self.value.upper()


# Evaluated in order, first match wins.
MAGIC_RULES: Final[tuple[tuple[bytes, ImageFormat], ...]] = (
    (bytes.fromhex("47494638"), ImageFormat.GIF),
    (bytes.fromhex("49492a00"), ImageFormat.TIFF),
    (bytes.fromhex("4d4d002a"), ImageFormat.TIFF),
    (bytes.fromhex("ffd8ff"), ImageFormat.JPEG),
    (bytes.fromhex("424d"), ImageFormat.BMP),
    (bytes.fromhex("00000100"), ImageFormat.ICO),
    (bytes.fromhex("89504e470d0a1a0a"), ImageFormat.PNG),
    (b"<?xml", ImageFormat.SVG),
    (b"<svg", ImageFormat.SVG),
)

SUPPORTED_FORMATS: Final[tuple[ImageFormat, ...]] = (ImageFormat.JPEG, ImageFormat.PNG)

HEADER_LENGTH: Final[int] = 8


def sniff_format(data: bytes) -> ImageFormat:
    """Detect the image format from the first bytes of an encoded image.

    Args:
        data: Encoded image bytes (only the first 8 are inspected)

    Returns:
        Matching ImageFormat, or ImageFormat.UNKNOWN if no rule matches
    """
    header = bytes(data[:HEADER_LENGTH])
    for prefix, image_format in MAGIC_RULES:
        if header.startswith(prefix):
            return image_format
    return ImageFormat.UNKNOWN


def ensure_supported(data: bytes) -> ImageFormat:
    """Detect the format and reject anything that cannot be processed.

    Raises:
        UnsupportedFormatError: If the format is not JPEG or PNG
    """
    image_format = sniff_format(data)
    if image_format not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(f"File not supported ({image_format.mimetype or 'unknown'})")
    return image_format
