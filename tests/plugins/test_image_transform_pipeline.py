"""Tests for the decode -> resize -> orient -> encode pipeline."""

from io import BytesIO

import pytest
from PIL import Image

from img_transform.common.errors import DecodeError, ResizeError
from img_transform.common.schemas import OutputFormat, SourceFormat
from img_transform.plugins.image_transform.algo import exif_orientation
from img_transform.plugins.image_transform.algo.pipeline import PipelineState, transform

CORE_STATES = [
    PipelineState.DECODED,
    PipelineState.RESIZED,
    PipelineState.ORIENTED,
    PipelineState.ENCODED,
]


def test_transform_resizes_and_rotates(rotated_jpeg_bytes: bytes):
    """Test 800x600 at width 400 with tag 6 yields a clockwise-rotated 300x400."""
    outcome = transform(rotated_jpeg_bytes, 400, "image/jpeg")

    assert outcome.resized_size == (400, 300)
    assert outcome.size == (300, 400)
    assert outcome.orientation == 6
    assert outcome.source_format == SourceFormat.JPEG
    assert outcome.states == CORE_STATES

    with Image.open(BytesIO(outcome.data)) as result:
        result.load()
        assert result.format == "JPEG"
        assert result.size == (300, 400)
        # red top-left quadrant now sits top-right
        r, _, b = result.convert("RGB").getpixel((225, 100))
        assert r > 200 and b < 60
        r, _, b = result.convert("RGB").getpixel((75, 100))
        assert r < 60 and b > 200


def test_transform_without_orientation(jpeg_bytes: bytes):
    """Test a JPEG without EXIF keeps the resized orientation."""
    outcome = transform(jpeg_bytes, 400, "image/jpeg")

    assert outcome.size == (400, 300)
    assert outcome.orientation is None
    assert outcome.states == CORE_STATES


def test_transform_tag_1_matches_untagged(image_bytes):
    """Test tag 1 is pixel-identical to no tag."""
    tagged = transform(image_bytes(orientation=1), 200, "image/png")
    untagged = transform(image_bytes(), 200, "image/png")

    assert tagged.image.tobytes() == untagged.image.tobytes()
    assert tagged.data == untagged.data


def test_transform_png_output(jpeg_bytes: bytes):
    """Test PNG output is lossless relative to the final buffer."""
    outcome = transform(jpeg_bytes, 400, "image/png")

    assert outcome.output_format == OutputFormat.PNG
    with Image.open(BytesIO(outcome.data)) as result:
        result.load()
        assert result.format == "PNG"
        assert result.tobytes() == outcome.image.tobytes()


@pytest.mark.parametrize("mime_type", ["image/webp", "text/plain", None, ""])
def test_transform_unknown_mime_falls_back_to_jpeg(png_bytes: bytes, mime_type: str | None):
    """Test unrecognized output types are encoded as JPEG."""
    outcome = transform(png_bytes, 100, mime_type)

    assert outcome.output_format == OutputFormat.JPEG
    assert outcome.data.startswith(b"\xff\xd8")


def test_transform_malformed_exif_is_not_fatal(
    malformed_exif_jpeg_bytes: bytes, log_messages: list[str]
):
    """Test corrupt EXIF still produces output with identity orientation."""
    outcome = transform(malformed_exif_jpeg_bytes, 400, "image/jpeg")

    assert outcome.size == (400, 300)
    assert outcome.orientation is None
    assert outcome.states == CORE_STATES
    assert any(m.startswith("WARNING") for m in log_messages)


def test_transform_truncated_exif_is_not_fatal(
    truncated_exif_jpeg_bytes: bytes, log_messages: list[str]
):
    """Test an overrunning EXIF IFD is logged at WARNING and ignored."""
    outcome = transform(truncated_exif_jpeg_bytes, 400, "image/jpeg")

    assert outcome.size == (400, 300)
    assert outcome.orientation is None
    assert outcome.states == CORE_STATES
    assert any(m.startswith("WARNING") and "Could not rotate image" in m for m in log_messages)


def test_transform_cmyk_source_to_png(cmyk_jpeg_bytes: bytes):
    """Test a CMYK JPEG can be re-encoded as PNG."""
    outcome = transform(cmyk_jpeg_bytes, 40, "image/png")

    assert outcome.output_format == OutputFormat.PNG
    assert outcome.size == (40, 30)
    with Image.open(BytesIO(outcome.data)) as result:
        assert result.format == "PNG"
        assert result.mode == "RGB"
        assert result.size == (40, 30)


def test_transform_png_source_skips_orientation(image_bytes, monkeypatch):
    """Test PNG sources never invoke the orientation reader."""

    def fail(_: bytes) -> int | None:
        raise AssertionError("orientation must not be read for PNG sources")

    monkeypatch.setattr(exif_orientation, "read_orientation", fail)

    outcome = transform(image_bytes(fmt="PNG", orientation=6), 400, "image/jpeg")

    assert outcome.source_format == SourceFormat.PNG
    assert outcome.size == (400, 300)
    assert PipelineState.ORIENTED in outcome.states


def test_transform_garbage_raises():
    """Test undecodable input fails before any output exists."""
    with pytest.raises(DecodeError):
        _ = transform(b"definitely not an image", 400, "image/jpeg")


@pytest.mark.parametrize("target_width", [0, -5])
def test_transform_invalid_width_raises(jpeg_bytes: bytes, target_width: float):
    """Test unusable widths fail the resize stage."""
    with pytest.raises(ResizeError):
        _ = transform(jpeg_bytes, target_width, "image/jpeg")


def test_transform_logs_stage_timings(jpeg_bytes: bytes, log_messages: list[str]):
    """Test every stage is profiled."""
    _ = transform(jpeg_bytes, 100, "image/jpeg")

    for stage in ("decode", "resize", "orient", "encode"):
        assert any(f"[PROFILE] {stage} took" in m for m in log_messages)
