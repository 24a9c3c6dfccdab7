"""Pure image decoding logic."""

from dataclasses import dataclass
from io import BytesIO

from PIL import Image, UnidentifiedImageError

from ....common.errors import DecodeError
from ....common.schemas import SourceFormat
from ....utils.profiling import timed


@dataclass(frozen=True)
class DecodedImage:
    image: Image.Image
    source_format: SourceFormat


def _normalize_mode(image: Image.Image) -> Image.Image:
    # Pillow resamples palette and bilevel images with NEAREST only
    if image.mode == "P":
        return image.convert("RGBA" if "transparency" in image.info else "RGB")
    if image.mode == "1":
        return image.convert("L")
    return image


@timed("decode")
def decode_image(data: bytes) -> DecodedImage:
    """
    Decode raw bytes into an in-memory image.

    The container format is detected from the content; the caller's MIME
    header plays no part. Multi-frame sources yield their first frame.

    Args:
        data: Encoded image bytes

    Returns:
        DecodedImage holding a fully loaded image and the detected format

    Raises:
        DecodeError: If the bytes are empty, not a supported image, or truncated
    """
    if not data:
        raise DecodeError("Source is empty")

    try:
        with Image.open(BytesIO(data)) as img:
            source_format = SourceFormat.from_pil(img.format)
            img.load()
            image = _normalize_mode(img.copy())
    except UnidentifiedImageError as exc:
        raise DecodeError("Source is not a supported image format") from exc
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Could not decode source image: {exc}") from exc

    return DecodedImage(image=image, source_format=source_format)
