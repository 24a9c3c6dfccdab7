"""img_transform - fetch, resize, reorient, re-encode and upload one image per call."""

from .common.compute_module import ComputeModule
from .common.config import Settings, get_settings
from .common.errors import TransformError
from .common.schemas import OutputFormat, SourceFormat, TransformRequest, TransformResponse
from .common.transport import DestinationUploader, HttpTransport, SourceFetcher
from .plugins.image_transform.algo.pipeline import PipelineState, TransformOutcome, transform
from .plugins.image_transform.task import ImageTransformTask

__version__ = "0.1.0"

__all__ = [
    "ComputeModule",
    "Settings",
    "get_settings",
    "TransformError",
    "OutputFormat",
    "SourceFormat",
    "TransformRequest",
    "TransformResponse",
    "SourceFetcher",
    "DestinationUploader",
    "HttpTransport",
    "PipelineState",
    "TransformOutcome",
    "transform",
    "ImageTransformTask",
    "__version__",
]
