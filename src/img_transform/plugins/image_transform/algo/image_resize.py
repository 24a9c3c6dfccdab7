"""Pure width-driven resize logic."""

import math

from PIL import Image

from ....common.errors import ResizeError
from ....utils.profiling import timed


def compute_target_size(width: int, height: int, new_width: float) -> tuple[int, int]:
    """
    Compute output dimensions for a target width, preserving aspect ratio.

    ``ratio = new_width / width`` and the height is ``floor(height * ratio)``.
    The width is floored the same way.

    Raises:
        ResizeError: If ``new_width`` is not a finite number greater than 0, or
            either computed dimension is 0
    """
    if not math.isfinite(new_width) or new_width <= 0:
        raise ResizeError(f"Target width must be a finite number greater than 0, got {new_width}")
    if width <= 0 or height <= 0:
        raise ResizeError(f"Source image has no pixels ({width}x{height})")

    ratio = new_width / width
    target_width = math.floor(new_width)
    target_height = math.floor(height * ratio)

    if target_width < 1 or target_height < 1:
        raise ResizeError(
            f"Resizing {width}x{height} to width {new_width} "
            + f"yields an empty image ({target_width}x{target_height})"
        )
    return target_width, target_height


@timed("resize")
def resize_image(image: Image.Image, new_width: float) -> Image.Image:
    """
    Resample ``image`` to ``new_width`` with a Lanczos filter.

    Returns a new image; the input is left untouched.
    """
    size = compute_target_size(image.width, image.height, new_width)
    return image.resize(size, Image.Resampling.LANCZOS)
