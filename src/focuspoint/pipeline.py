"""Focus crop pipeline: sniff, decode, scale, crop and encode.

Each request runs its stages strictly in sequence and either returns complete
encoded bytes or raises. Nothing is written or returned for a failed request.
"""

import logging
import os
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from PIL import Image

from focuspoint.config import SIZE_PLACEHOLDER, FocusOptions
from focuspoint.errors import UnsupportedFormatError
from focuspoint.formats import HEADER_LENGTH, ImageFormat, ensure_supported
from focuspoint.geometry import Size, assert_size, compute_crop_offset, plan_scale
from focuspoint.processing import decode, encode, resample

logger = logging.getLogger(__name__)


def _as_size(size: Size | str) -> Size:
    if not isinstance(size, Size):
        return Size.parse(size)
    assert_size(size)
    return size


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def crop_image(image: Image.Image, target: Size, options: FocusOptions) -> Image.Image:
    """Cover-fit an already decoded image to the target size around the focus point.

    Args:
        image: Decoded source image (not modified)
        target: Requested output size
        options: Focus point and resampling options

    Returns:
        New image of exactly the target size
    """
    plan = plan_scale(Size(image.width, image.height), target)
    logger.debug(
        "Planned %dx%d -> %s (ratio %.3f) for target %s",
        image.width,
        image.height,
        plan.resample_size,
        plan.ratio,
        target,
    )

    resampled = resample(image, plan.resample_size, options)
    scaled = Size(resampled.width, resampled.height)
    offset = compute_crop_offset(scaled, target, options.focus)
    return resampled.crop(offset.crop_box(scaled, target))


def _crop_to_bytes(
    image: Image.Image,
    image_format: ImageFormat,
    target: Size,
    options: FocusOptions,
) -> bytes:
    start = time.perf_counter()
    data = encode(crop_image(image, target, options), image_format, options)
    if not options.quiet:
        logger.info("- %s in %d ms", target, _elapsed_ms(start))
    return data


def focus_crop(
    data: bytes,
    size: Size | str | None = None,
    options: FocusOptions | None = None,
) -> bytes:
    """Crop and resize encoded image bytes around a focus point.

    Args:
        data: Encoded JPEG or PNG bytes
        size: Output size as a Size or 'WIDTHxHEIGHT'; None keeps the image size
        options: Crop options (default: FocusOptions())

    Returns:
        Encoded bytes in the same format as the input

    Raises:
        UnsupportedFormatError: If the input is not JPEG or PNG
        InvalidSizeError: If the size is malformed or degenerate
        DecodeError: If the image cannot be decoded
        ResampleError: If resampling fails
        EncodeError: If encoding fails
    """
    options = options or FocusOptions()
    start = time.perf_counter()

    image_format = ensure_supported(data)
    target = _as_size(size) if size is not None else None
    image = decode(data, image_format)
    if target is None:
        target = Size(image.width, image.height)

    result = _crop_to_bytes(image, image_format, target, options)
    if not options.quiet:
        logger.info("Done in %d ms", _elapsed_ms(start))
    return result


def focus_crop_sizes(
    data: bytes,
    sizes: Iterable[Size | str],
    options: FocusOptions | None = None,
) -> dict[Size, bytes]:
    """Crop encoded image bytes to several sizes from a single decode.

    Results are returned only when every size succeeds.

    Args:
        data: Encoded JPEG or PNG bytes
        sizes: Output sizes as Size or 'WIDTHxHEIGHT'; empty keeps the image size
        options: Crop options (default: FocusOptions())

    Returns:
        Mapping of size to encoded bytes, in the order the sizes were given
    """
    options = options or FocusOptions()
    start = time.perf_counter()

    image_format = ensure_supported(data)
    targets = [_as_size(size) for size in sizes]
    image = decode(data, image_format)
    if not targets:
        targets = [Size(image.width, image.height)]

    results = {target: _crop_to_bytes(image, image_format, target, options) for target in targets}
    if not options.quiet:
        logger.info("Done in %d ms", _elapsed_ms(start))
    return results


def output_filename(source: Path, size: Size, options: FocusOptions | None = None) -> str:
    """Build the output file name for a source image cropped to a size.

    Example:
        >>> output_filename(Path("photos/cat.jpg"), Size(800, 600))
        'cat-800x600-focused.jpg'
    """
    options = options or FocusOptions()
    suffix = options.suffix.replace(SIZE_PLACEHOLDER, str(size))
    return f"{options.prefix}{source.stem}{suffix}{source.suffix}"


def focus_crop_file(
    image_path: Path,
    output_dir: Path,
    sizes: Iterable[Size | str] | None = None,
    options: FocusOptions | None = None,
) -> list[Path]:
    """Crop an image file to one or more sizes and write the results to a directory.

    Files are written only after every size has been produced.

    Args:
        image_path: Path to a JPEG or PNG image
        output_dir: Directory for output files (created if missing)
        sizes: Output sizes; None or empty keeps the image size
        options: Crop options (default: FocusOptions())

    Returns:
        Paths of the written files

    Raises:
        FileNotFoundError: If the image doesn't exist
    """
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    options = options or FocusOptions()
    results = focus_crop_sizes(image_path.read_bytes(), sizes or [], options)

    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for size, result in results.items():
        output_path = output_dir / output_filename(image_path, size, options)
        output_path.write_bytes(result)
        written.append(output_path)
    return written


def focus_crop_directory(
    input_dir: Path,
    output_dir: Path,
    sizes: Iterable[Size | str],
    options: FocusOptions | None = None,
    pattern: str = "*",
    progress_callback: Callable[[int, int], None] | None = None,
) -> list[Path]:
    """Focus crop every supported image in a directory.

    Files that are not JPEG or PNG are skipped with a warning. Images are
    processed in parallel; the first failure is raised once running work ends.

    Args:
        input_dir: Directory containing input images
        output_dir: Directory to save cropped images
        sizes: Output sizes as Size or 'WIDTHxHEIGHT'
        options: Crop options (default: FocusOptions())
        pattern: Glob pattern for input files (default: "*")
        progress_callback: Optional callback function (current, total) -> None

    Returns:
        Sorted list of paths to written files

    Raises:
        FileNotFoundError: If input directory doesn't exist
    """
    if not input_dir.exists():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")

    options = options or FocusOptions()
    targets = [_as_size(size) for size in sizes]

    image_files = []
    for path in sorted(input_dir.glob(pattern)):
        if not path.is_file():
            continue
        with path.open("rb") as f:
            header = f.read(HEADER_LENGTH)
        try:
            ensure_supported(header)
        except UnsupportedFormatError as e:
            logger.warning("Skipping %s: %s", path.name, e)
            continue
        image_files.append(path)

    total = len(image_files)
    if total == 0:
        return []

    output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    with ThreadPoolExecutor(max_workers=os.cpu_count()) as executor:
        futures = {
            executor.submit(focus_crop_file, image_path, output_dir, targets, options): image_path
            for image_path in image_files
        }
        for i, future in enumerate(as_completed(futures), start=1):
            written.extend(future.result())
            if progress_callback:
                progress_callback(i, total)

    return sorted(written)
