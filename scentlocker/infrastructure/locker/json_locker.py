"""JSON-file storage for the personal fragrance collection."""

import json
from pathlib import Path
from typing import List

from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.interfaces.locker_repository import LockerRepository
from scentlocker.utils.exceptions import LockerPersistenceError
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)


class JsonLockerRepository(LockerRepository):
    """
    Stores the locker as a flat JSON array of fragrance records.

    Missing or corrupt files read as an empty collection; entries that
    cannot be rebuilt are skipped with a warning.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> List[Fragrance]:
        if not self.path.exists():
            logger.debug(f"No locker file at {self.path}, starting empty")
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Error loading locker from {self.path}, starting empty: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(f"Locker file {self.path} is not a JSON array, starting empty")
            return []

        fragrances: List[Fragrance] = []
        for entry in data:
            try:
                fragrances.append(Fragrance.from_dict(entry))
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Skipping invalid locker entry: {e}")

        logger.info(f"Loaded {len(fragrances)} fragrances from locker")
        return fragrances

    def save(self, fragrances: List[Fragrance]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump([item.to_dict() for item in fragrances], f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise LockerPersistenceError(
                f"Failed to save locker: {e}", path=str(self.path)
            ) from e

        logger.debug(f"Saved {len(fragrances)} fragrances to {self.path}")
