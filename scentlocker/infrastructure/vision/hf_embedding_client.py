"""
HuggingFace Inference API client for CLIP image embeddings.

The hosted model may be cold: the API then answers 503 with a
``retry-after`` header. The client waits that long and retries once.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Dict, List, Optional

import aiohttp

from scentlocker.domain.interfaces.embedding_provider import EmbeddingProvider
from scentlocker.utils.config import VisionConfig
from scentlocker.utils.exceptions import (
    EmbeddingProviderError,
    EmbeddingResponseError,
    ImageDownloadError,
    ModelLoadingError,
)
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

HF_CLIP_URL = "https://api-inference.huggingface.co/models/sentence-transformers/clip-ViT-B-32"
MODEL_LOADING_STATUS = 503


def parse_embedding(payload: Any) -> List[float]:
    """
    Extract the vector from a provider response.

    Accepts a flat list, a single-row nested list, or
    ``{"embedding": [...]}``.

    Raises:
        EmbeddingResponseError: For any other shape.
    """
    if isinstance(payload, dict):
        payload = payload.get("embedding")

    if isinstance(payload, list) and len(payload) == 1 and isinstance(payload[0], list):
        payload = payload[0]

    if not isinstance(payload, list) or not payload:
        raise EmbeddingResponseError("Unexpected response format from vision API")

    try:
        return [float(x) for x in payload]
    except (TypeError, ValueError) as e:
        raise EmbeddingResponseError(
            "Embedding contains non-numeric values", context={"sample": str(payload[:3])}
        ) from e


class HuggingFaceEmbeddingClient(EmbeddingProvider):
    """
    Async embedding provider backed by the HuggingFace Inference API.

    Use as an async context manager, or pass an existing
    ``aiohttp.ClientSession`` that the caller closes.

    Example:
        >>> async with HuggingFaceEmbeddingClient.from_config(config.vision) as client:
        ...     vector = await client.embed_image(jpeg_bytes)
    """

    def __init__(
        self,
        api_url: str = HF_CLIP_URL,
        api_token: Optional[str] = None,
        timeout_seconds: float = 30,
        default_retry_after: float = 10.0,
        max_concurrency: int = 8,
        session: Optional[aiohttp.ClientSession] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.api_url = api_url
        self.api_token = api_token
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self.default_retry_after = default_retry_after
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._session = session
        self._owns_session = session is None
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: VisionConfig, **kwargs) -> "HuggingFaceEmbeddingClient":
        return cls(
            api_url=config.api_url,
            api_token=config.api_token,
            timeout_seconds=config.timeout_seconds,
            default_retry_after=config.default_retry_after,
            max_concurrency=config.max_concurrency,
            **kwargs,
        )

    async def __aenter__(self) -> "HuggingFaceEmbeddingClient":
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    def _headers(self) -> Dict[str, str]:
        if self.api_token:
            return {"Authorization": f"Bearer {self.api_token}"}
        return {}

    def _retry_after(self, headers: Any) -> float:
        raw = headers.get("retry-after") if headers else None
        try:
            return float(raw) if raw is not None else self.default_retry_after
        except (TypeError, ValueError):
            return self.default_retry_after

    async def _post_image(self, image: bytes) -> List[float]:
        session = self._get_session()
        form = aiohttp.FormData()
        form.add_field("file", image, filename="image.jpg", content_type="image/jpeg")

        async with session.post(
            self.api_url, data=form, headers=self._headers(), timeout=self.timeout
        ) as response:
            body = await response.text()

            if response.status == MODEL_LOADING_STATUS:
                raise ModelLoadingError(retry_after=self._retry_after(response.headers))

            if not 200 <= response.status < 300:
                raise EmbeddingProviderError(
                    f"HF API error: {response.status}",
                    status_code=response.status,
                    details=body[:500],
                )

        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            raise EmbeddingResponseError("Vision API returned invalid JSON") from e
        return parse_embedding(payload)

    async def embed_image(self, image: bytes) -> List[float]:
        """
        Embed encoded image bytes.

        Raises:
            ModelLoadingError: If the model is still loading after one retry.
            EmbeddingProviderError: On any other HTTP or transport failure.
            EmbeddingResponseError: On an unexpected payload.
        """
        async with self._semaphore:
            try:
                try:
                    return await self._post_image(image)
                except ModelLoadingError as e:
                    logger.info(f"Embedding model loading, retrying in {e.retry_after:.0f}s")
                    await self._sleep(e.retry_after)
                    return await self._post_image(image)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise EmbeddingProviderError(f"Vision API request failed: {e}") from e

    async def _download(self, image_url: str) -> bytes:
        session = self._get_session()
        try:
            async with session.get(image_url, timeout=self.timeout) as response:
                if response.status != 200:
                    raise ImageDownloadError(
                        f"Failed to fetch image: {response.status}",
                        image_url=image_url,
                        status_code=response.status,
                    )
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ImageDownloadError(f"Failed to fetch image: {e}", image_url=image_url) from e

    async def embed_url(self, image_url: str) -> List[float]:
        """Download an image, then embed it."""
        if not image_url:
            raise ImageDownloadError("No image URL provided")
        image = await self._download(image_url)
        return await self.embed_image(image)
