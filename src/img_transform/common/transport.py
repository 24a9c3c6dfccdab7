"""
Fetch/upload capabilities - the only network boundary of the handler.

Design goals:
- Keep the transformation pipeline free of I/O
- Make timeouts explicit so a hung endpoint cannot block an invocation forever
- Let tests inject in-memory implementations
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx
from loguru import logger

from .config import Settings
from .errors import FetchError, UploadError


@runtime_checkable
class SourceFetcher(Protocol):
    def fetch(self, url: str) -> bytes:
        """
        Download the source image.

        Raises:
            FetchError: network failure, timeout or non-2xx response.
        """
        ...


@runtime_checkable
class DestinationUploader(Protocol):
    def upload(self, url: str, data: bytes, mime_type: str) -> None:
        """
        Write the encoded image to the destination.

        Raises:
            UploadError: network failure, timeout or non-2xx response.
        """
        ...


class HttpTransport(SourceFetcher, DestinationUploader):
    """
    httpx implementation of both capabilities.

    The source is downloaded with ``GET``; the result is written with ``PUT``
    and a ``Content-Type`` matching the encoded format.
    """

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self._settings: Settings = settings
        self._client: httpx.Client = client or httpx.Client(
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        )

    def _timeout(self, read_timeout: float) -> httpx.Timeout:
        return httpx.Timeout(
            read_timeout,
            connect=self._settings.connect_timeout,
        )

    def fetch(self, url: str) -> bytes:
        logger.info(f"Downloading source image from {url}")
        try:
            response = self._client.get(url, timeout=self._timeout(self._settings.fetch_timeout))
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, str(e) or type(e).__name__) from e

        data = response.content
        logger.debug(f"Downloaded {len(data)} bytes from {url}")
        return data

    def upload(self, url: str, data: bytes, mime_type: str) -> None:
        logger.info(f"Uploading {len(data)} bytes ({mime_type}) to {url}")
        try:
            response = self._client.put(
                url,
                content=data,
                headers={"Content-Type": mime_type},
                timeout=self._timeout(self._settings.upload_timeout),
            )
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UploadError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise UploadError(url, str(e) or type(e).__name__) from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
