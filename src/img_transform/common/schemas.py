"""Pydantic schemas and enumerations shared by the handler surfaces."""

import math
from enum import StrEnum
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidRequestError, TransformError

MIME_JPEG = "image/jpeg"
MIME_PNG = "image/png"

JPEG_QUALITY = 90


# ─────────────────────────────────────────────────────────────
# Formats
# ─────────────────────────────────────────────────────────────


class SourceFormat(StrEnum):
    """Input container detected from the image bytes."""

    JPEG = "JPEG"
    MPO = "MPO"
    PNG = "PNG"
    GIF = "GIF"
    WEBP = "WEBP"
    BMP = "BMP"
    TIFF = "TIFF"
    OTHER = "OTHER"

    @classmethod
    def from_pil(cls, pil_format: str | None) -> "SourceFormat":
        if not pil_format:
            return cls.OTHER
        try:
            return cls(pil_format.upper())
        except ValueError:
            return cls.OTHER

    @property
    def is_jpeg_class(self) -> bool:
        """True for containers that carry JPEG EXIF orientation."""
        return self in (SourceFormat.JPEG, SourceFormat.MPO)


class OutputFormat(StrEnum):
    """Output encoding requested by the caller."""

    JPEG = "JPEG"
    PNG = "PNG"

    @classmethod
    def from_mime(cls, mime_type: str | None) -> "OutputFormat":
        """Map a MIME type to an output format; unknown types fall back to JPEG."""
        if mime_type is None:
            return cls.JPEG
        normalized = mime_type.split(";", 1)[0].strip().lower()
        if normalized == MIME_PNG:
            return cls.PNG
        return cls.JPEG

    @property
    def mime_type(self) -> str:
        return MIME_PNG if self is OutputFormat.PNG else MIME_JPEG


# ─────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────


class TransformRequest(BaseModel):
    """One invocation's parameters. Immutable once built."""

    source_url: str = Field(min_length=1, description="URL of the source image")
    destination_url: str = Field(min_length=1, description="URL the result is PUT to")
    target_width: float = Field(gt=0, allow_inf_nan=False, description="Target width in pixels")
    output_mime_type: str = Field(default=MIME_JPEG, description="Requested output MIME type")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat.from_mime(self.output_mime_type)

    @classmethod
    def from_params(
        cls,
        *,
        source_url: str | None,
        destination_url: str | None,
        size: str | None,
        mime_type: str | None = None,
    ) -> "TransformRequest":
        """Validate raw header/query values.

        Raises:
            InvalidRequestError: a required value is missing, or ``size`` is not
                a finite number greater than zero.
        """
        if not source_url:
            raise InvalidRequestError("Missing source url")
        if not destination_url:
            raise InvalidRequestError("Missing destination url")
        if size is None or not size.strip():
            raise InvalidRequestError("Missing size")

        try:
            target_width = float(size)
        except ValueError as exc:
            raise InvalidRequestError(f"Size is not a number: {size!r}") from exc

        if not math.isfinite(target_width) or target_width <= 0:
            raise InvalidRequestError(f"Size must be a finite number greater than 0: {size!r}")

        try:
            return cls(
                source_url=source_url,
                destination_url=destination_url,
                target_width=target_width,
                output_mime_type=mime_type or MIME_JPEG,
            )
        except ValidationError as exc:
            raise InvalidRequestError(str(exc)) from exc


# ─────────────────────────────────────────────────────────────
# Response
# ─────────────────────────────────────────────────────────────


class TransformResponse(BaseModel):
    """Payload returned to the caller of one invocation."""

    status: Literal["ok", "error"]
    status_code: int = Field(default=200, exclude=True)

    # success
    mime_type: str | None = None
    width: int | None = None
    height: int | None = None
    size_bytes: int | None = None
    orientation: int | None = None
    states: list[str] = Field(default_factory=list)

    # failure
    error_kind: str | None = None
    message: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @classmethod
    def from_error(cls, exc: TransformError) -> "TransformResponse":
        return cls(
            status="error",
            status_code=exc.status_code,
            error_kind=exc.kind,
            message=exc.message,
        )
