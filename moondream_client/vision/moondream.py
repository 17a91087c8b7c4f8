"""MoondreamVisionClient — Moondream cloud API backend over httpx."""
import logging
from collections.abc import AsyncIterator
from typing import Any, Optional

import httpx

from moondream_client.config import Config
from moondream_client.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_TIMEOUT,
    MSG_HTTP_ERROR,
    MSG_STREAM_CLOSED,
    MSG_SUBMITTING,
)
from moondream_client.errors import HttpError
from moondream_client.stream.decoder import aiter_chunks
from moondream_client.vision.client import VisionClient
from moondream_client.vision.images import ImageInput, encode_image
from moondream_client.vision.response import decode_body, raise_for_status
from moondream_client.vision.tasks import (
    CaptionLength,
    TaskKind,
    TaskResult,
    build_body,
    build_headers,
)

logger = logging.getLogger(__name__)


class MoondreamVisionClient(VisionClient):

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        image_format: str = DEFAULT_IMAGE_FORMAT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._headers = build_headers(api_key)
        self._base_url = base_url.rstrip("/")
        self._image_format = image_format
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> "MoondreamVisionClient":
        return cls(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            image_format=config.image_format,
            **kwargs,
        )

    async def __aenter__(self) -> "MoondreamVisionClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        match self._owns_http:
            case True:
                await self._http.aclose()
            case False:
                pass

    def _prepare(
        self, kind: TaskKind, image: ImageInput, argument: str | CaptionLength, stream: bool
    ) -> tuple[str, dict[str, Any]]:
        url = self._base_url + kind.endpoint
        body = build_body(kind, encode_image(image, self._image_format), argument, stream)
        logger.info(MSG_SUBMITTING, kind.name.lower(), url, stream)
        return url, body

    async def submit(
        self, kind: TaskKind, image: ImageInput, argument: str | CaptionLength
    ) -> TaskResult:
        url, body = self._prepare(kind, image, argument, stream=False)
        try:
            response = await self._http.post(url, json=body, headers=self._headers)
        except httpx.HTTPError as exc:
            raise HttpError(MSG_HTTP_ERROR % exc) from exc
        return TaskResult.from_json(kind, decode_body(response))

    async def stream(
        self, kind: TaskKind, image: ImageInput, argument: str | CaptionLength
    ) -> AsyncIterator[str]:
        url, body = self._prepare(kind, image, argument, stream=True)
        received = 0
        try:
            async with self._http.stream("POST", url, json=body, headers=self._headers) as response:
                match response.status_code:
                    case 200:
                        pass
                    case status:
                        await response.aread()
                        raise_for_status(status, response.text)
                async for chunk in aiter_chunks(response.aiter_bytes()):
                    received += 1
                    yield chunk
        except (httpx.HTTPError, httpx.StreamError) as exc:
            raise HttpError(MSG_HTTP_ERROR % exc) from exc
        logger.debug(MSG_STREAM_CLOSED, received)
