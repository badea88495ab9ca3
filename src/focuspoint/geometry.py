"""Cover-fit scaling and focus-aware crop offsets.

This module holds the geometry behind a focal-point crop. It never touches
pixels: every function takes sizes in and returns new sizes or offsets out.

Coordinate System Notes:
- Sizes are (width, height) in pixels; values may be fractional until rounded
  for the resampler.
- Focus points are percentages [0-100] of the image size, independent of pixels.
- Crop offsets are non-positive translations of the scaled image relative to
  the target frame, with a top-left origin.
"""

import math
import re
from dataclasses import dataclass

from focuspoint.errors import InvalidSizeError

_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")

WIDTH = 0
HEIGHT = 1


@dataclass(frozen=True)
class Size:
    """Width and height in pixels.

    Attributes:
        width: Width in pixels
        height: Height in pixels
    """

    width: float
    height: float

    @classmethod
    def parse(cls, value: str) -> "Size":
        """Parse a size written as 'WIDTHxHEIGHT' (e.g. '800x600').

        Raises:
            InvalidSizeError: If the string is malformed or a dimension is zero
        """
        match = _SIZE_PATTERN.match(value)
        if match is None:
            raise InvalidSizeError(f"Invalid size {value!r}, expected WIDTHxHEIGHT")
        size = cls(int(match.group(1)), int(match.group(2)))
        assert_size(size, "size")
        return size

    @property
    def is_degenerate(self) -> bool:
        """True if either dimension is zero or negative."""
        return self.width <= 0 or self.height <= 0

    def covers(self, other: "Size") -> bool:
        """Check if this size is at least as large as another on both axes."""
        return self.width >= other.width and self.height >= other.height

    def rounded(self) -> tuple[int, int]:
        """Whole-pixel (width, height), as accepted by Pillow."""
        return (int(round(self.width)), int(round(self.height)))

    def __str__(self) -> str:
        width, height = self.rounded()
        return f"{width}x{height}"


@dataclass(frozen=True)
class FocusPoint:
    """Focus position as percentages of the image size.

    Values outside [0, 100] are accepted here and clamped wherever they are used.
    """

    x: float = 50.0
    y: float = 50.0

    def bounded(self) -> "FocusPoint":
        """Return a copy with both coordinates clamped to [0, 100]."""
        return FocusPoint(bound_percentage(self.x), bound_percentage(self.y))


@dataclass(frozen=True)
class ScalePlan:
    """Result of planning a cover-fit scale.

    Attributes:
        scaled_size: Smallest aspect-preserving size that covers the target when
            growing is needed, otherwise the original size
        ratio: Factor (>= 1) by which scaled_size exceeds the target on its
            binding axis
        resample_size: scaled_size reduced by ratio to whole pixels, never
            smaller than the target on either axis
    """

    scaled_size: Size
    ratio: float
    resample_size: Size


@dataclass(frozen=True)
class CropOffset:
    """Translation applied to the scaled image so the target window lands on the focus.

    Attributes:
        shift_x: Horizontal shift in pixels (<= 0)
        shift_y: Vertical shift in pixels (<= 0)
    """

    shift_x: float = 0.0
    shift_y: float = 0.0

    def crop_box(self, scaled: Size, target: Size) -> tuple[int, int, int, int]:
        """Return the window as a Pillow box (left, top, right, bottom) in scaled-image pixels.

        The box is kept inside the scaled image after rounding to whole pixels.

        Example:
            >>> CropOffset(shift_x=-250.0, shift_y=0.0).crop_box(Size(1000, 400), Size(500, 400))
            (250, 0, 750, 400)
        """
        scaled_width, scaled_height = scaled.rounded()
        width, height = target.rounded()
        left = min(max(int(round(-self.shift_x)), 0), max(scaled_width - width, 0))
        top = min(max(int(round(-self.shift_y)), 0), max(scaled_height - height, 0))
        return (left, top, left + width, top + height)


def assert_size(size: Size, name: str = "size") -> None:
    """Raise InvalidSizeError if either dimension is zero or negative."""
    if size.is_degenerate:
        raise InvalidSizeError(f"Invalid {name} {size.width}x{size.height}: dimensions must be greater than 0")


def bound_percentage(value: float) -> float:
    """Clamp a percentage to [0, 100]. NaN is treated as the center (50)."""
    if math.isnan(value):
        return 50.0
    return max(min(value, 100), 0)


def plan_scaled_size(original: Size, target: Size) -> Size:
    """Compute the smallest aspect-preserving size covering the target.

    The target axis with the larger value is handled first (width wins ties).
    If the original is smaller on that axis it is grown to match, carrying the
    other axis along. The other axis is then checked the same way, which only
    triggers for extreme aspect ratios. An original that already covers the
    target is returned unchanged.

    Args:
        original: Size of the source image
        target: Requested output size

    Returns:
        New Size with width >= target.width and height >= target.height

    Raises:
        InvalidSizeError: If either size has a zero or negative dimension

    Example:
        >>> plan_scaled_size(Size(400, 200), Size(1000, 1000))
        Size(width=2000.0, height=1000)
    """
    assert_size(original, "original size")
    assert_size(target, "target size")

    size = [original.width, original.height]
    wanted = [target.width, target.height]

    bigger = WIDTH if wanted[WIDTH] >= wanted[HEIGHT] else HEIGHT
    smaller = HEIGHT if bigger == WIDTH else WIDTH

    if wanted[bigger] > size[bigger]:
        size[smaller] *= wanted[bigger] / size[bigger]
        size[bigger] = wanted[bigger]

    if wanted[smaller] > size[smaller]:
        size[bigger] *= wanted[smaller] / size[smaller]
        size[smaller] = wanted[smaller]

    return Size(size[WIDTH], size[HEIGHT])


def plan_scale(original: Size, target: Size) -> ScalePlan:
    """Plan the size to resample an image to before cropping it to the target.

    When the covering size is larger than the target on both axes, it is reduced
    by the smaller of the two excess ratios so the resampled image is the minimal
    cover: it matches the target exactly on one axis.

    Args:
        original: Size of the source image
        target: Requested output size

    Returns:
        ScalePlan with the covering size, its ratio and the resample size

    Raises:
        InvalidSizeError: If either size has a zero or negative dimension
    """
    scaled = plan_scaled_size(original, target)

    ratio = 1.0
    if scaled.width > target.width and scaled.height > target.height:
        ratio = min(scaled.width / target.width, scaled.height / target.height)

    # Rounding may not fall below the target or the crop window would overflow
    resample_size = Size(
        max(target.width, int(round(scaled.width / ratio))),
        max(target.height, int(round(scaled.height / ratio))),
    )
    return ScalePlan(scaled_size=scaled, ratio=ratio, resample_size=resample_size)


def _axis_shift(scaled_length: float, target_length: float, focus_percentage: float) -> float:
    focus_px = (scaled_length / 100) * focus_percentage
    half_target = target_length / 2

    if scaled_length == target_length or focus_px <= half_target:
        return 0.0

    if focus_px > scaled_length - half_target:
        # Past the last half window: anchor at the far edge
        return -(scaled_length - target_length)

    return -(focus_px - half_target)


def compute_crop_offset(scaled: Size, target: Size, focus: FocusPoint) -> CropOffset:
    """Compute the shift that centers the target window on the focus point.

    Each axis is handled independently. The window stays anchored at the near
    edge while the focus lies within half a window of it, stays anchored at the
    far edge while the focus lies within half a window of that, and is centered
    on the focus in between. The window never leaves the scaled image:
    0 <= -shift <= scaled - target on both axes.

    Args:
        scaled: Size of the resampled image
        target: Requested output size, no larger than scaled on either axis
        focus: Focus point in percentages; clamped to [0, 100]

    Returns:
        CropOffset with non-positive shifts

    Raises:
        InvalidSizeError: If a size is degenerate or the target does not fit
            inside the scaled size

    Example:
        >>> compute_crop_offset(Size(2000, 1000), Size(1000, 500), FocusPoint(90, 50))
        CropOffset(shift_x=-1000, shift_y=-250.0)
    """
    assert_size(scaled, "scaled size")
    assert_size(target, "target size")
    if not scaled.covers(target):
        raise InvalidSizeError(
            f"Target size {target.width}x{target.height} does not fit inside "
            f"scaled size {scaled.width}x{scaled.height}"
        )

    focus = focus.bounded()
    return CropOffset(
        shift_x=_axis_shift(scaled.width, target.width, focus.x),
        shift_y=_axis_shift(scaled.height, target.height, focus.y),
    )
