"""Image transform task implementation."""

from typing_extensions import override

from loguru import logger

from ...common.compute_module import ComputeModule
from ...common.schemas import TransformRequest, TransformResponse
from ...common.transport import DestinationUploader, SourceFetcher
from .algo.pipeline import PipelineState, transform


class ImageTransformTask(ComputeModule[TransformRequest]):
    """Fetch a source image, transform it and upload the result."""

    def __init__(self, fetcher: SourceFetcher, uploader: DestinationUploader):
        self._fetcher: SourceFetcher = fetcher
        self._uploader: DestinationUploader = uploader

    @property
    @override
    def task_type(self) -> str:
        return "image_transform"

    @override
    def run(self, params: TransformRequest) -> TransformResponse:
        logger.info(
            f"source_url: {params.source_url}, dest_url: {params.destination_url}, "
            + f"size: {params.target_width}"
        )

        source_bytes = self._fetcher.fetch(params.source_url)
        states = [PipelineState.FETCHED]

        outcome = transform(source_bytes, params.target_width, params.output_mime_type)
        states.extend(outcome.states)

        self._uploader.upload(
            params.destination_url,
            outcome.data,
            outcome.output_format.mime_type,
        )
        states.append(PipelineState.DELIVERED)

        width, height = outcome.size
        return TransformResponse(
            status="ok",
            mime_type=outcome.output_format.mime_type,
            width=width,
            height=height,
            size_bytes=len(outcome.data),
            orientation=outcome.orientation,
            states=[state.value for state in states],
        )
