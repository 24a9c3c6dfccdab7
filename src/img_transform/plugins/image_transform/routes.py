"""Image transform route factory."""

from typing import Annotated, Callable

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse

from ...common.compute_module import ComputeModule
from ...common.errors import InvalidRequestError
from ...common.schemas import TransformRequest, TransformResponse


def render_response(result: TransformResponse) -> JSONResponse:
    return JSONResponse(
        status_code=result.status_code,
        content=result.model_dump(mode="json", exclude_none=True),
    )


def create_router(
    get_task: Callable[[], ComputeModule[TransformRequest]],
) -> APIRouter:
    """Create router with injected dependencies.

    Args:
        get_task: Dependency returning the task that fetches, transforms and
            uploads. Tests inject a task with in-memory transport.

    Returns:
        Configured APIRouter with the transform endpoint
    """
    router = APIRouter()

    @router.post("/transform")
    def transform_image(
        task: Annotated[ComputeModule[TransformRequest], Depends(get_task)],
        source_url: Annotated[str | None, Header(description="URL of the source image")] = None,
        destination_url: Annotated[
            str | None, Header(description="URL the transformed image is PUT to")
        ] = None,
        mime_type: Annotated[str | None, Header(description="Output MIME type")] = None,
        size: Annotated[str | None, Query(description="Target width in pixels")] = None,
    ) -> JSONResponse:
        """Transform one image.

        Returns:
            200 with the output description, or a non-200 status with
            ``error_kind`` and ``message``
        """
        try:
            request = TransformRequest.from_params(
                source_url=source_url,
                destination_url=destination_url,
                size=size,
                mime_type=mime_type,
            )
        except InvalidRequestError as exc:
            return render_response(TransformResponse.from_error(exc))

        return render_response(task.execute(request))

    # Mark function as used (accessed via FastAPI decorator)
    _ = transform_image

    return router
