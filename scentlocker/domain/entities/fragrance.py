"""
Fragrance domain entity.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Fragrance:
    """
    Immutable record of one perfume from the dataset.

    Identity is the (name, brand) pair: two records with the same pair
    are the same fragrance for locker membership and vibe caching.

    Attributes:
        name: Fragrance name (required, non-empty).
        brand: House or brand name, empty when unknown.
        top / middle / base: Ordered note names per pyramid layer.
        accords: Accord name -> intensity percentage (0-100).
        rating: Average user rating on a 0-5 scale.
        rating_count: Number of ratings behind ``rating``.
        oil_type: Free-text concentration hint (e.g. "Eau de Parfum").
    """

    name: str
    brand: str = ""
    year: Optional[int] = None
    country: Optional[str] = None
    top: Tuple[str, ...] = ()
    middle: Tuple[str, ...] = ()
    base: Tuple[str, ...] = ()
    accords: Dict[str, float] = field(default_factory=dict)
    rating: Optional[float] = None
    rating_count: Optional[int] = None
    price: Optional[float] = None
    image: Optional[str] = None
    description: Optional[str] = None
    gender: Optional[str] = None
    oil_type: Optional[str] = None
    sillage: Optional[str] = None
    longevity: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate required fields and freeze note sequences."""
        if not self.name or not self.name.strip():
            raise ValueError("Fragrance name cannot be empty")
        if self.rating is not None and not 0.0 <= self.rating <= 5.0:
            raise ValueError(f"Rating must be within [0, 5], got {self.rating}")
        for intensity in self.accords.values():
            if not 0.0 <= intensity <= 100.0:
                raise ValueError(f"Accord intensity must be within [0, 100], got {intensity}")

        # Accept lists from callers, store tuples
        object.__setattr__(self, "brand", self.brand or "")
        object.__setattr__(self, "top", tuple(self.top))
        object.__setattr__(self, "middle", tuple(self.middle))
        object.__setattr__(self, "base", tuple(self.base))

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def key(self) -> Tuple[str, str]:
        """De-duplication key used by the locker and the vibe cache."""
        return (self.name, self.brand)

    @property
    def all_notes(self) -> Tuple[str, ...]:
        """Top, middle and base notes in pyramid order."""
        return self.top + self.middle + self.base

    @property
    def has_image(self) -> bool:
        return bool(self.image)

    def matches(self, name: str, brand: Optional[str] = None) -> bool:
        """Case-insensitive lookup by name and, optionally, brand."""
        if self.name.lower() != name.lower():
            return False
        return brand is None or self.brand.lower() == brand.lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to plain JSON-compatible types."""
        data = asdict(self)
        for layer in ("top", "middle", "base"):
            data[layer] = list(data[layer])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Fragrance":
        """Rebuild a fragrance written by :meth:`to_dict`. Unknown keys are ignored."""
        known = {name for name in cls.__dataclass_fields__}
        kwargs = {k: v for k, v in data.items() if k in known}
        for layer in ("top", "middle", "base"):
            kwargs[layer] = tuple(kwargs.get(layer) or ())
        kwargs["accords"] = dict(kwargs.get("accords") or {})
        return cls(**kwargs)
