"""Image transformation algorithms."""

from .exif_orientation import apply_orientation, correct_orientation, read_orientation
from .image_decode import DecodedImage, decode_image
from .image_encode import encode_image
from .image_resize import compute_target_size, resize_image
from .pipeline import PipelineState, TransformOutcome, transform

__all__ = [
    "DecodedImage",
    "PipelineState",
    "TransformOutcome",
    "apply_orientation",
    "compute_target_size",
    "correct_orientation",
    "decode_image",
    "encode_image",
    "read_orientation",
    "resize_image",
    "transform",
]
