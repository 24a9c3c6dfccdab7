"""Transformation pipeline: decode -> resize -> orient -> encode.

The pipeline performs no I/O. Fetching the source and delivering the result
are the caller's job, which is why ``FETCHED`` and ``DELIVERED`` are recorded
by the task and not here.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from loguru import logger
from PIL import Image

from ....common.schemas import OutputFormat, SourceFormat
from .exif_orientation import correct_orientation
from .image_decode import decode_image
from .image_encode import encode_image
from .image_resize import resize_image


class PipelineState(StrEnum):
    FETCHED = "fetched"
    DECODED = "decoded"
    RESIZED = "resized"
    ORIENTED = "oriented"
    ENCODED = "encoded"
    DELIVERED = "delivered"


@dataclass
class TransformOutcome:
    data: bytes
    output_format: OutputFormat
    image: Image.Image
    source_format: SourceFormat
    resized_size: tuple[int, int]
    orientation: int | None = None
    states: list[PipelineState] = field(default_factory=list)

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


def transform(
    source_bytes: bytes,
    target_width: float,
    output_mime_type: str | None,
) -> TransformOutcome:
    """
    Run the full transformation on already-fetched source bytes.

    The orientation stage always runs; it is a no-op for non-JPEG sources and
    for sources without a readable orientation tag.

    Raises:
        DecodeError: If the bytes are not a supported image
        ResizeError: If ``target_width`` is unusable for this image
        EncodeError: If the result cannot be serialized
    """
    states: list[PipelineState] = []
    output_format = OutputFormat.from_mime(output_mime_type)

    decoded = decode_image(source_bytes)
    states.append(PipelineState.DECODED)
    logger.info(
        f"Decoded {decoded.source_format} image {decoded.image.width}x{decoded.image.height}"
    )

    logger.info(f"Will resize image to width {target_width}")
    resized = resize_image(decoded.image, target_width)
    states.append(PipelineState.RESIZED)

    oriented, orientation = correct_orientation(resized, source_bytes, decoded.source_format)
    states.append(PipelineState.ORIENTED)

    data = encode_image(oriented, output_format)
    states.append(PipelineState.ENCODED)
    logger.info(f"Encoded {oriented.width}x{oriented.height} {output_format} ({len(data)} bytes)")

    return TransformOutcome(
        data=data,
        output_format=output_format,
        image=oriented,
        source_format=decoded.source_format,
        resized_size=resized.size,
        orientation=orientation,
        states=states,
    )
