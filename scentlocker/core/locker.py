"""
The user's saved fragrance collection.
"""

from typing import Iterator, List, Optional

from scentlocker.core.locker_stats import DEFAULT_TOP_N, LockerStats, compute_locker_stats
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.interfaces.locker_repository import LockerRepository
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)


class Locker:
    """
    Ordered collection of saved fragrances, unique by (name, brand).

    The collection is read from the repository once at construction and
    written back after every mutation.

    Example:
        >>> locker = Locker(JsonLockerRepository("data/locker.json"))
        >>> locker.add(fragrance)
        True
        >>> locker.add(fragrance)
        False
    """

    def __init__(self, repository: LockerRepository) -> None:
        self.repository = repository
        self._items: List[Fragrance] = []
        for fragrance in repository.load():
            if not self.contains(fragrance):
                self._items.append(fragrance)

    @property
    def collection(self) -> List[Fragrance]:
        """Saved fragrances in insertion order (a copy)."""
        return list(self._items)

    def contains(self, fragrance: Fragrance) -> bool:
        return any(item.key == fragrance.key for item in self._items)

    def add(self, fragrance: Fragrance) -> bool:
        """
        Append a fragrance unless one with the same (name, brand) exists.

        Returns:
            True if the collection changed.

        Raises:
            LockerPersistenceError: If saving fails. The in-memory
                collection keeps the new entry.
        """
        if self.contains(fragrance):
            return False
        self._items.append(fragrance)
        logger.info(f"Added to locker: {fragrance.name} ({fragrance.brand or 'unknown brand'})")
        self.repository.save(self._items)
        return True

    def remove(self, fragrance: Fragrance) -> bool:
        """
        Remove the fragrance with the same (name, brand), if present.

        Returns:
            True if the collection changed.
        """
        remaining = [item for item in self._items if item.key != fragrance.key]
        if len(remaining) == len(self._items):
            return False
        self._items = remaining
        logger.info(f"Removed from locker: {fragrance.name}")
        self.repository.save(self._items)
        return True

    def find(self, name: str, brand: Optional[str] = None) -> Optional[Fragrance]:
        return next((item for item in self._items if item.matches(name, brand)), None)

    def stats(self, top_n: int = DEFAULT_TOP_N) -> LockerStats:
        """Collection insights, see ``compute_locker_stats``."""
        return compute_locker_stats(self._items, top_n=top_n)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Fragrance]:
        return iter(list(self._items))
