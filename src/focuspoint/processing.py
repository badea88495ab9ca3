"""Image decoding, resampling and encoding using Pillow."""

import io
import logging

from PIL import Image, ImageFilter, ImageOps, UnidentifiedImageError

from focuspoint.config import FocusOptions
from focuspoint.errors import DecodeError, EncodeError, ResampleError
from focuspoint.formats import ImageFormat
from focuspoint.geometry import Size

logger = logging.getLogger(__name__)

# Resampling filter per quality level, lowest to highest
QUALITY_FILTERS = {
    0: Image.Resampling.BOX,
    1: Image.Resampling.HAMMING,
    2: Image.Resampling.BICUBIC,
    3: Image.Resampling.LANCZOS,
}

UNSHARP_RADIUS = 1.0


def decode(data: bytes, image_format: ImageFormat) -> Image.Image:
    """Decode image bytes into a fully loaded Pillow image.

    EXIF orientation is applied so the returned pixels match how the image is displayed.

    Args:
        data: Encoded image bytes
        image_format: Format detected from the bytes

    Returns:
        Decoded image

    Raises:
        DecodeError: If Pillow cannot read the bytes as the given format
    """
    try:
        with Image.open(io.BytesIO(data), formats=[image_format.pillow_format]) as img:
            img.load()
            return ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Could not decode {image_format.mimetype} image: {e}") from e


def resample(image: Image.Image, size: Size, options: FocusOptions) -> Image.Image:
    """Resize an image to a whole-pixel size.

    Args:
        image: Source image (not modified)
        size: Target size; rounded to whole pixels
        options: Quality level, alpha handling and unsharp settings

    Returns:
        New resized image

    Raises:
        ResampleError: If Pillow fails to resize or filter the image
    """
    width, height = size.rounded()
    try:
        if not options.alpha and image.mode != "RGB":
            image = image.convert("RGB")
        elif options.alpha and image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA")

        resized = image.resize((width, height), resample=QUALITY_FILTERS[options.quality])

        if options.unsharp_amount > 0:
            threshold = int(round(options.unsharp_threshold * 255 / 100))
            resized = resized.filter(
                ImageFilter.UnsharpMask(
                    radius=UNSHARP_RADIUS,
                    percent=int(round(options.unsharp_amount)),
                    threshold=threshold,
                )
            )
    except (OSError, ValueError) as e:
        raise ResampleError(f"Could not resample image to {width}x{height}: {e}") from e

    logger.debug("Resampled %s image to %dx%d", image.mode, width, height)
    return resized


def encode(image: Image.Image, image_format: ImageFormat, options: FocusOptions) -> bytes:
    """Encode an image into bytes of the given format.

    JPEG output is always RGB and uses the configured quality and progressive flag;
    PNG output is lossless.

    Raises:
        EncodeError: If the format cannot be written or Pillow fails
    """
    buffer = io.BytesIO()
    try:
        if image_format is ImageFormat.JPEG:
            if image.mode != "RGB":
                image = image.convert("RGB")
            image.save(
                buffer,
                format="JPEG",
                quality=options.jpeg_quality,
                progressive=options.progressive,
            )
        elif image_format is ImageFormat.PNG:
            image.save(buffer, format="PNG")
        else:
            raise EncodeError(f"Cannot encode {image_format.mimetype or 'unknown'} images")
    except (OSError, ValueError) as e:
        raise EncodeError(f"Could not encode {image_format.mimetype} image: {e}") from e

    return buffer.getvalue()
