"""Typed error kinds raised by the transformation handler.

Every fatal failure maps to one ``TransformError`` subclass. ``kind`` is the
machine-readable name surfaced to callers and ``status_code`` is the HTTP status
the outer surfaces respond with.
"""

from typing import ClassVar


class TransformError(Exception):
    """Base class for transformation errors."""

    kind: ClassVar[str] = "InternalError"
    status_code: ClassVar[int] = 500

    def __init__(self, message: str):
        self.message: str = message
        super().__init__(message)


class InvalidRequestError(TransformError):
    """A required parameter is missing or ``size`` is not a usable number."""

    kind = "InvalidRequest"
    status_code = 400


class FetchError(TransformError):
    kind = "FetchError"
    status_code = 502

    def __init__(self, url: str, reason: str):
        self.url: str = url
        super().__init__(f"Failed to download source image from '{url}': {reason}")


class DecodeError(TransformError):
    kind = "DecodeError"
    status_code = 422


class ResizeError(TransformError):
    kind = "ResizeError"
    status_code = 400


class ExifParseError(TransformError):
    """EXIF segment is malformed. Never fatal: orientation falls back to identity."""

    kind = "ExifParseError"


class EncodeError(TransformError):
    kind = "EncodeError"
    status_code = 500


class UploadError(TransformError):
    kind = "UploadError"
    status_code = 502

    def __init__(self, url: str, reason: str):
        self.url: str = url
        super().__init__(f"Failed to upload to destination '{url}': {reason}")
