"""Exceptions raised by focuspoint."""


class FocuspointError(Exception):
    """Base exception for focuspoint errors."""

    pass


class InvalidSizeError(FocuspointError, ValueError):
    """Raised when a size has a zero or negative dimension, or cannot be parsed."""

    pass


class UnsupportedFormatError(FocuspointError):
    """Raised when the input bytes are not in an accepted image format."""

    pass


class DecodeError(FocuspointError):
    """Raised when image bytes cannot be decoded."""

    pass


class ResampleError(FocuspointError):
    """Raised when resampling an image fails."""

    pass


class EncodeError(FocuspointError):
    """Raised when encoding an image fails."""

    pass
