"""API Gateway proxy entry point.

The function is invoked with an API Gateway proxy event carrying the
``source-url``, ``destination-url`` and optional ``mime-type`` headers and a
``size`` query string parameter.
"""

import json
from collections.abc import Mapping
from typing import Any

from loguru import logger

from .common.compute_module import ComputeModule
from .common.config import get_settings
from .common.errors import InvalidRequestError
from .common.schemas import TransformRequest, TransformResponse
from .common.transport import HttpTransport
from .plugins.image_transform.task import ImageTransformTask
from .utils.log_config import configure_logging

SIZE_KEY = "size"

SOURCE_HEADER = "source-url"
DEST_HEADER = "destination-url"
MIME_HEADER = "mime-type"


def _lower_keys(values: Mapping[str, Any] | None) -> dict[str, str]:
    if not values:
        return {}
    return {str(key).lower(): str(value) for key, value in values.items() if value is not None}


def to_proxy_response(result: TransformResponse) -> dict[str, Any]:
    return {
        "statusCode": result.status_code,
        "headers": {"Content-Type": "application/json"},
        "isBase64Encoded": False,
        "body": json.dumps(result.model_dump(mode="json", exclude_none=True)),
    }


def handle_event(event: Mapping[str, Any], task: ComputeModule[TransformRequest]) -> dict[str, Any]:
    """Parse an API Gateway proxy event and run ``task`` on it."""
    headers = _lower_keys(event.get("headers"))
    query = _lower_keys(event.get("queryStringParameters"))

    try:
        request = TransformRequest.from_params(
            source_url=headers.get(SOURCE_HEADER),
            destination_url=headers.get(DEST_HEADER),
            size=query.get(SIZE_KEY),
            mime_type=headers.get(MIME_HEADER),
        )
    except InvalidRequestError as exc:
        logger.error(f"Rejected request: {exc.message}")
        return to_proxy_response(TransformResponse.from_error(exc))

    return to_proxy_response(task.execute(request))


def lambda_handler(event: Mapping[str, Any], context: object) -> dict[str, Any]:
    settings = get_settings()
    configure_logging(settings.log_level)

    with HttpTransport(settings) as transport:
        task = ImageTransformTask(fetcher=transport, uploader=transport)
        return handle_event(event, task)
