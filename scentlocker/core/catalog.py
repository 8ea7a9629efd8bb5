"""
In-memory fragrance catalog with a one-time, memoized dataset load.
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.infrastructure.dataset.loader import load_dataset_file
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

DatasetSource = Callable[[], List[Fragrance]]


class FragranceCatalog:
    """
    Read-only snapshot of the fragrance dataset.

    ``load()`` reads the source on the first successful call and is a
    no-op afterwards. Until then every lookup sees an empty catalog.
    """

    def __init__(self, source: Optional[DatasetSource] = None) -> None:
        self._source = source
        self._fragrances: List[Fragrance] = []
        self._loaded = False

    @classmethod
    def from_path(cls, path: str | Path) -> "FragranceCatalog":
        return cls(source=lambda: load_dataset_file(path))

    @classmethod
    def from_fragrances(cls, fragrances: Sequence[Fragrance]) -> "FragranceCatalog":
        catalog = cls()
        catalog.initialize(fragrances)
        return catalog

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def fragrances(self) -> List[Fragrance]:
        return self._fragrances

    def load(self) -> List[Fragrance]:
        """
        Load the dataset once.

        Raises:
            DatasetLoadError: If the source cannot be read. A later call
                retries.
            DatasetFormatError: If the source has an unsupported shape.
        """
        if self._loaded:
            return self._fragrances
        if self._source is None:
            logger.warning("Catalog has no dataset source, staying empty")
            return self._fragrances

        fragrances = self._source()
        self.initialize(fragrances)
        return self._fragrances

    def initialize(self, fragrances: Sequence[Fragrance]) -> None:
        """Install a dataset directly, replacing any previous one."""
        self._fragrances = list(fragrances)
        self._loaded = True
        logger.info(f"Catalog ready with {len(self._fragrances)} fragrances")

    def __len__(self) -> int:
        return len(self._fragrances)

    def get_by_name(self, name: str, brand: Optional[str] = None) -> Optional[Fragrance]:
        """First fragrance with this name (and brand, if given), case-insensitive."""
        return next((f for f in self._fragrances if f.matches(name, brand)), None)

    def with_images(self) -> List[Fragrance]:
        return [f for f in self._fragrances if f.has_image]

    def by_brand(self, brand: str, limit: int = 20) -> List[Fragrance]:
        """Fragrances whose brand contains ``brand``, case-insensitive."""
        needle = brand.lower()
        return [f for f in self._fragrances if needle in f.brand.lower()][:limit]

    def brands(self) -> List[str]:
        """Distinct brands, sorted, for filter pickers."""
        return sorted({f.brand for f in self._fragrances if f.brand})

    def accords(self) -> List[str]:
        """Distinct accord names, sorted, for filter pickers."""
        return sorted({a for f in self._fragrances for a in f.accords})

    def countries(self) -> List[str]:
        return sorted({f.country for f in self._fragrances if f.country})
