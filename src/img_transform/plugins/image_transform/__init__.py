"""Image transform plugin."""

from .task import ImageTransformTask

__all__ = ["ImageTransformTask"]
