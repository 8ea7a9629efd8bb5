"""Fragrance dataset ingestion.

Dataset rows come from several historical exports whose headers differ
("Perfume" vs "name", "Rating Value" vs "rating" ...). Every logical
field is resolved through an explicit, ordered alias tuple.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlparse

from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.utils.exceptions import DatasetFormatError, DatasetLoadError
from scentlocker.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

# First non-empty alias wins
FIELD_ALIASES: Mapping[str, Tuple[str, ...]] = {
    "id": ("id",),
    "name": ("Perfume", "name", "Name", "fragrance_name"),
    "brand": ("Brand", "brand", "brand_name"),
    "year": ("Year", "year"),
    "country": ("Country", "country"),
    "top": ("Top", "top", "top_notes", "topNotes"),
    "middle": ("Middle", "middle", "middle_notes", "middleNotes"),
    "base": ("Base", "base", "base_notes", "baseNotes"),
    "accords": ("accords", "Accords"),
    "rating": ("Rating Value", "rating", "Rating", "user_rating"),
    "rating_count": ("Rating Count", "rating_count", "ratingCount"),
    "price": ("price", "Price"),
    "image": ("url", "image", "Image", "image_url", "imageUrl", "Image URL"),
    "description": ("description", "Description"),
    "gender": ("Gender", "gender"),
    "oil_type": ("oilType", "oil_type", "Concentration", "concentration"),
    "sillage": ("sillage", "Sillage"),
    "longevity": ("longevity", "Longevity"),
}

# mainaccord1..5 in decreasing order of prominence
MAIN_ACCORD_KEYS = tuple(f"mainaccord{i}" for i in range(1, 6))
MAIN_ACCORD_INTENSITIES = (100, 80, 60, 40, 20)

ACCORD_LEVELS = {"Dominant": 100, "Prominent": 75, "Moderate": 50}
DEFAULT_ACCORD_LEVEL = 25


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def resolve_field(row: Mapping[str, Any], field: str) -> Any:
    """
    Value of a logical field in a raw row.

    Aliases are tried in order; None, blank strings and empty
    collections count as missing.

    Raises:
        KeyError: If ``field`` has no alias entry.
    """
    for alias in FIELD_ALIASES[field]:
        value = row.get(alias)
        if not _is_empty(value):
            return value
    return None


def parse_year(value: Any) -> Optional[int]:
    """Parse a year, tolerating float exports such as "2019.0"."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    cleaned = re.sub(r"\.0+$", "", str(value).strip())
    match = re.match(r"^-?\d+", cleaned)
    return int(match.group()) if match else None


def parse_number(value: Any) -> Optional[float]:
    """Parse a decimal that may use a comma separator ("4,12")."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().replace(",", "."))
    except ValueError:
        return None


def parse_rating(value: Any) -> Optional[float]:
    """Rating on the 0-5 scale, None when unparseable or out of range."""
    rating = parse_number(value)
    if rating is None or not 0.0 <= rating <= 5.0:
        return None
    return rating


def parse_count(value: Any) -> Optional[int]:
    """Integer counter such as "1.234" or "1234.0"."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return int(value)
    digits = re.sub(r"\.0+$", "", str(value).strip())
    digits = re.sub(r"[^0-9]", "", digits)
    return int(digits) if digits else None


def parse_price(value: Any) -> Optional[float]:
    """Price with currency symbols stripped ("$120.00" -> 120.0)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = re.sub(r"[^0-9.]", "", str(value))
    try:
        return float(cleaned) if cleaned else None
    except ValueError:
        return None


def parse_notes(value: Any) -> Tuple[str, ...]:
    """Notes from a list or a comma-separated string."""
    if isinstance(value, (list, tuple)):
        return tuple(str(n).strip() for n in value if not _is_empty(n))
    if isinstance(value, str):
        return tuple(n.strip() for n in value.split(",") if n.strip())
    return ()


def _clamp_intensity(value: float) -> float:
    return max(0.0, min(100.0, value))


def parse_accords(value: Any) -> Dict[str, float]:
    """
    Accords from a mapping of name to intensity.

    Numeric intensities are kept (clamped to 0-100); descriptive levels
    map Dominant -> 100, Prominent -> 75, Moderate -> 50, anything else
    -> 25.
    """
    if not isinstance(value, Mapping):
        return {}

    accords: Dict[str, float] = {}
    for name, level in value.items():
        if _is_empty(name):
            continue
        if isinstance(level, (int, float)) and not isinstance(level, bool):
            accords[str(name).strip()] = _clamp_intensity(float(level))
        elif isinstance(level, str):
            accords[str(name).strip()] = float(ACCORD_LEVELS.get(level.strip(), DEFAULT_ACCORD_LEVEL))
    return accords


def parse_main_accords(row: Mapping[str, Any]) -> Dict[str, float]:
    """Accords from the mainaccord1..5 columns."""
    accords: Dict[str, float] = {}
    for key, intensity in zip(MAIN_ACCORD_KEYS, MAIN_ACCORD_INTENSITIES):
        value = row.get(key)
        if isinstance(value, str) and value.strip():
            accords.setdefault(value.strip(), float(intensity))
    return accords


def slugify(text: str) -> str:
    return re.sub(r"\s+", "-", text.strip().lower())


def derive_id(row: Mapping[str, Any], name: str) -> str:
    """Id from the source URL's last path segment, else the slugged name."""
    explicit = resolve_field(row, "id")
    if explicit is not None:
        return str(explicit)

    url = row.get("url")
    if isinstance(url, str) and url.strip():
        segment = urlparse(url.strip()).path.rstrip("/").split("/")[-1]
        segment = re.sub(r"\.[^/.]+$", "", segment)
        if segment:
            return segment
    return slugify(name)


def _optional_str(value: Any) -> Optional[str]:
    return None if _is_empty(value) else str(value).strip()


def parse_image_url(value: Any) -> Optional[str]:
    """Absolute http(s) URL, else None ("N/A" and relative paths are dropped)."""
    text = _optional_str(value)
    if text is None:
        return None
    parsed = urlparse(text)
    if parsed.scheme.lower() not in {"http", "https"} or not parsed.netloc:
        return None
    return text


def row_to_fragrance(row: Mapping[str, Any]) -> Optional[Fragrance]:
    """
    Convert one raw dataset row.

    Returns:
        The fragrance, or None when the row has no name.
    """
    name = _optional_str(resolve_field(row, "name"))
    if not name:
        return None

    accords = parse_main_accords(row) or parse_accords(resolve_field(row, "accords"))

    return Fragrance(
        id=derive_id(row, name),
        name=name,
        brand=_optional_str(resolve_field(row, "brand")) or "",
        year=parse_year(resolve_field(row, "year")),
        country=_optional_str(resolve_field(row, "country")),
        top=parse_notes(resolve_field(row, "top")),
        middle=parse_notes(resolve_field(row, "middle")),
        base=parse_notes(resolve_field(row, "base")),
        accords=accords,
        rating=parse_rating(resolve_field(row, "rating")),
        rating_count=parse_count(resolve_field(row, "rating_count")),
        price=parse_price(resolve_field(row, "price")),
        image=parse_image_url(resolve_field(row, "image")),
        description=_optional_str(resolve_field(row, "description")),
        gender=_optional_str(resolve_field(row, "gender")),
        oil_type=_optional_str(resolve_field(row, "oil_type")),
        sillage=_optional_str(resolve_field(row, "sillage")),
        longevity=_optional_str(resolve_field(row, "longevity")),
    )


def extract_rows(data: Any, source: str = "<memory>") -> List[Mapping[str, Any]]:
    """
    Raw rows from a top-level array or ``{"fragrances": [...]}``.

    Raises:
        DatasetFormatError: For any other shape.
    """
    if isinstance(data, list):
        rows = data
    elif isinstance(data, dict) and isinstance(data.get("fragrances"), list):
        rows = data["fragrances"]
    else:
        raise DatasetFormatError(
            "Dataset must be a JSON array or an object with a 'fragrances' array",
            path=source,
        )
    return [row for row in rows if isinstance(row, Mapping)]


def parse_records(rows: Iterable[Mapping[str, Any]]) -> List[Fragrance]:
    """Convert raw rows, dropping the ones without a name."""
    fragrances: List[Fragrance] = []
    skipped = 0
    for row in rows:
        fragrance = row_to_fragrance(row)
        if fragrance is None:
            skipped += 1
            continue
        fragrances.append(fragrance)

    if skipped:
        logger.debug(f"Skipped {skipped} rows without a name")
    return fragrances


def load_dataset_file(path: str | Path) -> List[Fragrance]:
    """
    Load and convert a JSON dataset file.

    Args:
        path: JSON file location

    Returns:
        Fragrances in file order

    Raises:
        DatasetLoadError: If the file is missing or not valid JSON
        DatasetFormatError: If the JSON has an unsupported shape
    """
    path = Path(path)
    if not path.exists():
        raise DatasetLoadError(
            f"Dataset file not found: {path}. "
            f"Convert a CSV export with `scentlocker convert` first.",
            path=str(path),
        )

    with log_execution_time(logger, f"load dataset {path.name}"):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetLoadError(f"Dataset is not valid JSON: {e}", path=str(path)) from e

        fragrances = parse_records(extract_rows(data, source=str(path)))

    logger.info(f"Loaded {len(fragrances)} fragrances from {path}")
    return fragrances
