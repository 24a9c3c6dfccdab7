"""Pure image encoding logic."""

from io import BytesIO

from PIL import Image

from ....common.errors import EncodeError
from ....common.schemas import JPEG_QUALITY, OutputFormat
from ....utils.profiling import timed

JPEG_MODES = ("RGB", "L", "CMYK")
PNG_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")


@timed("encode")
def encode_image(image: Image.Image, output_format: OutputFormat) -> bytes:
    """
    Serialize an image for the requested output format.

    JPEG is written at a fixed quality of 90; PNG is lossless.

    Args:
        image: Final image buffer
        output_format: Requested output format

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If Pillow cannot write the image
    """
    save_kwargs: dict[str, object] = {}

    if output_format is OutputFormat.PNG:
        # PNG cannot store CMYK or float buffers
        if image.mode == "F":
            image = image.convert("L")
        elif image.mode not in PNG_MODES:
            image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
        save_kwargs["optimize"] = True
    else:
        # JPEG does not support alpha or palette modes
        if image.mode not in JPEG_MODES:
            image = image.convert("RGB")
        save_kwargs["quality"] = JPEG_QUALITY

    buffer = BytesIO()
    try:
        image.save(buffer, format=output_format.value, **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Could not encode image as {output_format}: {exc}") from exc

    return buffer.getvalue()
