"""Common module - protocols, schemas, errors and base classes."""

from .compute_module import ComputeModule
from .config import Settings, get_settings
from .errors import (
    DecodeError,
    EncodeError,
    ExifParseError,
    FetchError,
    InvalidRequestError,
    ResizeError,
    TransformError,
    UploadError,
)
from .schemas import OutputFormat, SourceFormat, TransformRequest, TransformResponse
from .transport import DestinationUploader, HttpTransport, SourceFetcher

__all__ = [
    "ComputeModule",
    "Settings",
    "get_settings",
    "TransformError",
    "InvalidRequestError",
    "FetchError",
    "DecodeError",
    "ResizeError",
    "ExifParseError",
    "EncodeError",
    "UploadError",
    "OutputFormat",
    "SourceFormat",
    "TransformRequest",
    "TransformResponse",
    "SourceFetcher",
    "DestinationUploader",
    "HttpTransport",
]
