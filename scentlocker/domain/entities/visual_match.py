"""
Value objects used by the visual matcher.
"""

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple


@dataclass(frozen=True)
class ImageCandidate:
    """
    A pre-computed image embedding paired with the item it depicts.

    ``item`` is usually a :class:`Fragrance` but the matcher does not
    depend on it.
    """

    embedding: Tuple[float, ...]
    item: Any

    @classmethod
    def from_list(cls, embedding: Sequence[float], item: Any) -> "ImageCandidate":
        return cls(embedding=tuple(float(x) for x in embedding), item=item)

    @property
    def dimension(self) -> int:
        return len(self.embedding)

    def to_list(self) -> List[float]:
        return list(self.embedding)


@dataclass(frozen=True)
class VisualMatch:
    """Best candidate for a query image and its cosine similarity."""

    item: Any
    similarity: float


@dataclass(frozen=True)
class ImageSource:
    """A candidate whose embedding still has to be fetched from its image URL."""

    url: str
    item: Any
