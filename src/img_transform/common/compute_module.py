"""ComputeModule - Abstract base class for synchronous compute tasks."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from loguru import logger
from pydantic import BaseModel

from .errors import TransformError
from .schemas import TransformResponse

P = TypeVar("P", bound=BaseModel)


class ComputeModule(ABC, Generic[P]):
    """
    Stateless, template-method based compute module.

    - Params are validated before ``execute`` is called
    - run() owns the work and raises ``TransformError`` subclasses
    - execute() turns the outcome into a ``TransformResponse``
    """

    @property
    @abstractmethod
    def task_type(self) -> str: ...

    def setup(self) -> None:
        """Optional per-execution setup."""
        pass

    @abstractmethod
    def run(self, params: P) -> TransformResponse:
        """Execute task and return the success payload."""
        ...

    def execute(self, params: P) -> TransformResponse:
        try:
            self.setup()
            return self.run(params)

        except TransformError as exc:
            logger.error(f"{self.task_type} failed with {exc.kind}: {exc.message}")
            return TransformResponse.from_error(exc)

        except Exception as exc:
            logger.exception(f"{self.task_type} failed unexpectedly")
            return TransformResponse(
                status="error",
                status_code=TransformError.status_code,
                error_kind=TransformError.kind,
                message=str(exc),
            )
