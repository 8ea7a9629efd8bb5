"""
Abstract interface for external image-embedding providers.
"""

from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """
    Abstract base class for image-embedding providers.

    Implementations turn an image into a fixed-length numeric vector.
    The model behind them is a black box.
    """

    @abstractmethod
    async def embed_image(self, image: bytes) -> List[float]:
        """
        Generate an embedding for encoded image bytes.

        Args:
            image: JPEG/PNG encoded image content.

        Returns:
            Embedding vector.

        Raises:
            EmbeddingProviderError: If the provider fails or answers
                with an unexpected payload.
        """
        pass

    @abstractmethod
    async def embed_url(self, image_url: str) -> List[float]:
        """
        Generate an embedding for an image reachable at a URL.

        Args:
            image_url: Public URL of the image.

        Returns:
            Embedding vector.
        """
        pass
