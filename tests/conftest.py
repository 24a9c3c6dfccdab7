"""Test configuration and fixtures for img_transform.

This module provides:
- Synthetic image factories (plain, quadrant-coloured, EXIF-tagged)
- A loguru capture sink
- In-memory fetch/upload transport
"""

import struct
from collections.abc import Callable, Iterator
from io import BytesIO

import pytest
from loguru import logger
from PIL import ExifTags, Image, ImageDraw

from img_transform.common.errors import FetchError, UploadError

RED = (255, 0, 0)
BLUE = (0, 0, 255)


# ============================================================================
# Image factories
# ============================================================================


def make_quadrant_image(width: int, height: int) -> Image.Image:
    """Blue image with a red top-left quadrant; asymmetric under every flip/rotation."""
    img = Image.new("RGB", (width, height), color=BLUE)
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, width // 2 - 1, height // 2 - 1], fill=RED)
    return img


def encode(img: Image.Image, fmt: str, **kwargs: object) -> bytes:
    buffer = BytesIO()
    img.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def jpeg_with_orientation(img: Image.Image, orientation: int) -> bytes:
    exif = Image.Exif()
    exif[ExifTags.Base.Orientation] = orientation
    return encode(img, "JPEG", quality=95, exif=exif)


@pytest.fixture
def quadrant_image() -> Callable[[int, int], Image.Image]:
    return make_quadrant_image


@pytest.fixture
def jpeg_bytes() -> bytes:
    """800x600 JPEG without EXIF."""
    return encode(make_quadrant_image(800, 600), "JPEG", quality=95)


@pytest.fixture
def png_bytes() -> bytes:
    """800x600 PNG without metadata."""
    return encode(make_quadrant_image(800, 600), "PNG")


@pytest.fixture
def rotated_jpeg_bytes() -> bytes:
    """800x600 JPEG tagged with EXIF orientation 6."""
    return jpeg_with_orientation(make_quadrant_image(800, 600), 6)


@pytest.fixture
def malformed_exif_jpeg_bytes() -> bytes:
    """800x600 JPEG whose APP1 Exif segment has no valid TIFF header."""
    return encode(
        make_quadrant_image(800, 600),
        "JPEG",
        quality=95,
        exif=b"Exif\x00\x00not-a-tiff-header",
    )


@pytest.fixture
def truncated_exif_jpeg_bytes() -> bytes:
    """800x600 JPEG whose Exif IFD claims more entries than the segment holds."""
    tiff = b"II*\x00" + struct.pack("<I", 8) + struct.pack("<H", 0xFFFF)
    return encode(make_quadrant_image(800, 600), "JPEG", quality=95, exif=b"Exif\x00\x00" + tiff)


@pytest.fixture
def cmyk_jpeg_bytes() -> bytes:
    """80x60 CMYK JPEG."""
    return encode(Image.new("CMYK", (80, 60), (0, 255, 255, 0)), "JPEG", quality=95)


# ============================================================================
# Logging
# ============================================================================


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect formatted loguru records emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} | {message}")
    yield messages
    logger.remove(handler_id)


# ============================================================================
# Transport
# ============================================================================


class FakeTransport:
    """In-memory fetch/upload capability recording every call."""

    def __init__(self, sources: dict[str, bytes] | None = None):
        self.sources: dict[str, bytes] = sources or {}
        self.fetched: list[str] = []
        self.uploads: list[tuple[str, bytes, str]] = []
        self.fail_upload: bool = False

    def fetch(self, url: str) -> bytes:
        self.fetched.append(url)
        if url not in self.sources:
            raise FetchError(url, "HTTP 404")
        return self.sources[url]

    def upload(self, url: str, data: bytes, mime_type: str) -> None:
        if self.fail_upload:
            raise UploadError(url, "HTTP 500")
        self.uploads.append((url, data, mime_type))


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Factory: quadrant image of a given size encoded as JPEG or PNG.

    ``orientation`` attaches an EXIF orientation tag (JPEG and PNG both carry it).
    """

    def factory(
        width: int = 800,
        height: int = 600,
        fmt: str = "JPEG",
        orientation: int | None = None,
    ) -> bytes:
        img = make_quadrant_image(width, height)
        kwargs: dict[str, object] = {"quality": 95} if fmt == "JPEG" else {}
        if orientation is not None:
            exif = Image.Exif()
            exif[ExifTags.Base.Orientation] = orientation
            kwargs["exif"] = exif
        return encode(img, fmt, **kwargs)

    return factory
