"""Focal-point-aware cover crop and resize for raster images."""

from focuspoint.config import FocusOptions, Settings, get_settings
from focuspoint.errors import (
    DecodeError,
    EncodeError,
    FocuspointError,
    InvalidSizeError,
    ResampleError,
    UnsupportedFormatError,
)
from focuspoint.formats import ImageFormat, ensure_supported, sniff_format
from focuspoint.geometry import (
    CropOffset,
    FocusPoint,
    ScalePlan,
    Size,
    bound_percentage,
    compute_crop_offset,
    plan_scale,
    plan_scaled_size,
)
from focuspoint.pipeline import (
    crop_image,
    focus_crop,
    focus_crop_directory,
    focus_crop_file,
    focus_crop_sizes,
    output_filename,
)

try:
    from focuspoint._version import __version__, __version_tuple__
except ImportError:
    __version__ = "0.0.0+unknown"
    __version_tuple__ = (0, 0, 0, "unknown", "unknown")

__all__ = [
    "__version__",
    "__version_tuple__",
    "Size",
    "FocusPoint",
    "ScalePlan",
    "CropOffset",
    "bound_percentage",
    "plan_scaled_size",
    "plan_scale",
    "compute_crop_offset",
    "ImageFormat",
    "sniff_format",
    "ensure_supported",
    "FocusOptions",
    "Settings",
    "get_settings",
    "crop_image",
    "focus_crop",
    "focus_crop_sizes",
    "focus_crop_file",
    "focus_crop_directory",
    "output_filename",
    "FocuspointError",
    "InvalidSizeError",
    "UnsupportedFormatError",
    "DecodeError",
    "ResampleError",
    "EncodeError",
]
