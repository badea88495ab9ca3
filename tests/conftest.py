"""Pytest fixtures for focuspoint tests."""

import io

import pytest
from PIL import Image

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    """Encode a Pillow image to bytes."""
    buffer = io.BytesIO()
    if fmt == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    """Factory for encoded solid-color images."""

    def _make(width: int, height: int, fmt: str = "PNG", color=(128, 128, 128), mode: str = "RGB") -> bytes:
        if mode == "RGBA" and len(color) == 3:
            color = (*color, 255)
        return encode_image(Image.new(mode, (width, height), color), fmt)

    return _make


@pytest.fixture
def split_png() -> bytes:
    """400x200 PNG whose left half is red and right half is blue."""
    image = Image.new("RGB", (400, 200), RED)
    image.paste(BLUE, (200, 0, 400, 200))
    return encode_image(image, "PNG")


@pytest.fixture
def stacked_png() -> bytes:
    """200x400 PNG whose top half is red and bottom half is blue."""
    image = Image.new("RGB", (200, 400), RED)
    image.paste(BLUE, (0, 200, 200, 400))
    return encode_image(image, "PNG")
