"""EXIF orientation reading and correction.

The orientation tag is read from the original encoded bytes, because resizing
drops metadata, and applied to the already-resized buffer.

Transforms are expressed as Pillow transposes. Pillow's ``ROTATE_*`` constants
turn counter-clockwise, so a clockwise quarter turn is ``ROTATE_270``.
"""

import struct
import warnings
from io import BytesIO
from typing import Final

from loguru import logger
from PIL import ExifTags, Image

from ....common.errors import ExifParseError
from ....common.schemas import SourceFormat
from ....utils.profiling import timed

T = Image.Transpose

FLIP_HORIZONTAL: Final = T.FLIP_LEFT_RIGHT
FLIP_VERTICAL: Final = T.FLIP_TOP_BOTTOM
ROTATE_90_CW: Final = T.ROTATE_270
ROTATE_180: Final = T.ROTATE_180
ROTATE_270_CW: Final = T.ROTATE_90

# Applied left to right. Order matters for 5 and 7.
ORIENTATION_TRANSFORMS: Final[dict[int, tuple[Image.Transpose, ...]]] = {
    1: (),
    2: (FLIP_HORIZONTAL,),
    3: (ROTATE_180,),
    4: (FLIP_VERTICAL,),
    5: (FLIP_HORIZONTAL, ROTATE_270_CW),
    6: (ROTATE_90_CW,),
    7: (ROTATE_270_CW, FLIP_HORIZONTAL),
    8: (ROTATE_270_CW,),
}


def read_orientation(source_bytes: bytes) -> int | None:
    """
    Read the EXIF orientation tag from encoded image bytes.

    Returns:
        The tag value, or None when there is no EXIF segment or no
        orientation entry in it

    Raises:
        ExifParseError: If the EXIF segment cannot be parsed
    """
    try:
        with Image.open(BytesIO(source_bytes)) as img:
            raw = img.info.get("exif")
    except (OSError, SyntaxError, ValueError) as exc:
        raise ExifParseError(f"Could not open source for EXIF reading: {exc}") from exc

    if not raw:
        return None

    exif = Image.Exif()
    try:
        # Pillow only warns, and yields an empty directory, on a truncated IFD
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            exif.load(raw)
            value = exif.get(ExifTags.Base.Orientation)
    except (SyntaxError, ValueError, TypeError, KeyError, struct.error, OSError) as exc:
        raise ExifParseError(f"Malformed EXIF segment: {exc}") from exc
    if caught:
        raise ExifParseError(f"Malformed EXIF segment: {caught[0].message}")

    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ExifParseError(f"Orientation tag is not an integer: {value!r}") from exc


def apply_orientation(image: Image.Image, orientation: int | None) -> Image.Image:
    """
    Apply the geometric transform for an EXIF orientation tag.

    Tag 1, None and values outside 1-8 leave the pixels as they are. A new
    image is always returned.
    """
    transforms = ORIENTATION_TRANSFORMS.get(orientation or 1, ())
    if not transforms:
        return image.copy()

    result = image
    for transform in transforms:
        result = result.transpose(transform)
    return result


@timed("orient")
def correct_orientation(
    image: Image.Image,
    source_bytes: bytes,
    source_format: SourceFormat,
) -> tuple[Image.Image, int | None]:
    """
    Orientation stage: reorient ``image`` from the source's EXIF tag.

    Non-JPEG sources are returned as they are without reading metadata.
    Unreadable EXIF is logged and treated as no tag.

    Returns:
        The (possibly) transformed image and the tag that was applied
    """
    if not source_format.is_jpeg_class:
        logger.debug(f"Skipping EXIF orientation for {source_format} source")
        return image, None

    try:
        orientation = read_orientation(source_bytes)
    except ExifParseError as exc:
        logger.warning(f"Could not rotate image: {exc.message}")
        return image, None

    if orientation is None:
        logger.debug("No EXIF orientation tag present")
        return image, None

    if orientation not in ORIENTATION_TRANSFORMS:
        logger.warning(f"Ignoring unknown EXIF orientation {orientation}")
        return image, None

    logger.info(f"Applying EXIF orientation {orientation}")
    return apply_orientation(image, orientation), orientation
