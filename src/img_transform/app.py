"""FastAPI application factory."""

from fastapi import FastAPI

from .common.config import Settings, get_settings
from .common.transport import HttpTransport
from .plugins.image_transform.routes import create_router
from .plugins.image_transform.task import ImageTransformTask
from .utils.log_config import configure_logging


def create_app(
    settings: Settings | None = None,
    transport: HttpTransport | None = None,
) -> FastAPI:
    """Build the HTTP application.

    Example:
        uvicorn --factory img_transform.app:create_app
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    http = transport or HttpTransport(settings)

    def get_task() -> ImageTransformTask:
        return ImageTransformTask(fetcher=http, uploader=http)

    app = FastAPI(title="img-transform")
    app.include_router(create_router(get_task))
    return app
