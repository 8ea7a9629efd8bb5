"""
Abstract interface for personal collection storage.
"""

from abc import ABC, abstractmethod
from typing import List

from scentlocker.domain.entities.fragrance import Fragrance


class LockerRepository(ABC):
    """
    Abstract base class for locker storage backends.

    A backend stores the whole collection as one ordered list; it is
    read once at startup and rewritten after every mutation.
    """

    @abstractmethod
    def load(self) -> List[Fragrance]:
        """
        Read the stored collection.

        Returns:
            Saved fragrances in insertion order. Missing or unreadable
            storage yields an empty list.
        """
        pass

    @abstractmethod
    def save(self, fragrances: List[Fragrance]) -> None:
        """
        Replace the stored collection.

        Raises:
            LockerPersistenceError: If the collection cannot be written.
        """
        pass
