# Visual Search Use Case
"""
Use case for identifying a perfume bottle from a photo.

The photo is embedded by the external provider, compared with every
catalog image, and a confident match is saved to the locker.
"""
from dataclasses import dataclass
from typing import Optional

from scentlocker.core.catalog import FragranceCatalog
from scentlocker.core.locker import Locker
from scentlocker.core.visual_matcher import VisualMatcher
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.entities.visual_match import ImageSource
from scentlocker.domain.interfaces.embedding_provider import EmbeddingProvider
from scentlocker.utils.image_validation import to_jpeg_bytes, validate_image_bytes
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

NO_CANDIDATES_MESSAGE = "No fragrances with images found to compare. Please try again."
NO_MATCH_MESSAGE = (
    "No matching fragrance found. Try taking a clearer photo "
    "or ensure the perfume bottle is visible."
)


@dataclass
class VisualSearchResult:
    """Result of a visual search."""
    fragrance: Optional[Fragrance] = None
    similarity: Optional[float] = None
    added_to_locker: bool = False
    candidates_compared: int = 0
    message: str = ""

    @property
    def matched(self) -> bool:
        return self.fragrance is not None


class VisualSearchUseCase:
    """
    Identifies a fragrance from a bottle photo.

    This use case:
    1. Validates the image and re-encodes it as JPEG
    2. Collects catalog fragrances that have an image URL
    3. Runs the visual matcher (concurrent embedding fan-out)
    4. Adds a confident match to the locker if it is not already there
    """

    def __init__(
        self,
        catalog: FragranceCatalog,
        provider: EmbeddingProvider,
        locker: Optional[Locker] = None,
        matcher: Optional[VisualMatcher] = None,
        candidate_limit: Optional[int] = None,
    ):
        self.catalog = catalog
        self.provider = provider
        self.locker = locker
        self.matcher = matcher or VisualMatcher()
        self.candidate_limit = candidate_limit

    async def execute(self, image: bytes, source: str = "camera") -> VisualSearchResult:
        """
        Match a photo against the catalog.

        Args:
            image: Encoded image from the camera or an upload.
            source: Label used in logs and validation errors.

        Returns:
            VisualSearchResult; ``message`` explains a missing match.

        Raises:
            InvalidImageError: If the image fails validation.
            EmbeddingProviderError: If the photo itself cannot be embedded.
        """
        validate_image_bytes(image, source=source)
        payload = to_jpeg_bytes(image)

        candidates = self.catalog.with_images()
        if self.candidate_limit is not None:
            candidates = candidates[: self.candidate_limit]
        if not candidates:
            logger.warning("Visual search without any catalog images")
            return VisualSearchResult(message=NO_CANDIDATES_MESSAGE)

        logger.info(f"Comparing photo from {source} with {len(candidates)} catalog images")
        sources = [ImageSource(url=f.image, item=f) for f in candidates]
        match = await self.matcher.match_image(payload, sources, self.provider)

        if match is None:
            return VisualSearchResult(
                candidates_compared=len(candidates), message=NO_MATCH_MESSAGE
            )

        fragrance: Fragrance = match.item
        added = False
        if self.locker is not None and not self.locker.contains(fragrance):
            added = self.locker.add(fragrance)

        return VisualSearchResult(
            fragrance=fragrance,
            similarity=match.similarity,
            added_to_locker=added,
            candidates_compared=len(candidates),
            message=f"Matched {fragrance.name} ({match.similarity:.0%} similar)",
        )
