"""Performance profiling utilities for the transformation stages."""

import time
from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from loguru import logger

P = ParamSpec("P")
R = TypeVar("R")


def timed(stage: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator factory measuring and logging the execution time of a stage.

    Logs ``[PROFILE] <stage> took <seconds>s`` at DEBUG level, whether the
    stage returns or raises.

    Usage:
        @timed("resize")
        def resize_image(image, new_width):
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                elapsed_time = time.perf_counter() - start_time
                logger.debug(f"[PROFILE] {stage} took {elapsed_time:.3f}s")

        return wrapper

    return decorator
