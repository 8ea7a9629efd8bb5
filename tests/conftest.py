"""Pytest fixtures and configuration for ScentLocker tests."""

import io
import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional

import pytest
from PIL import Image

from scentlocker.core.catalog import FragranceCatalog
from scentlocker.core.locker import Locker
from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.interfaces.embedding_provider import EmbeddingProvider
from scentlocker.infrastructure.locker.json_locker import JsonLockerRepository
from scentlocker.utils.config import (
    AppConfig,
    DatasetConfig,
    LockerConfig,
    SearchConfig,
    VisionConfig,
    reset_config,
)
from scentlocker.utils.exceptions import ImageDownloadError


@pytest.fixture
def test_config(temp_data_dir) -> AppConfig:
    """Provide test-specific configuration pointing at a temp directory."""
    return AppConfig(
        dataset=DatasetConfig(
            path=str(temp_data_dir / "perfumes.json"),
            lexical_scan_limit=5000,
            vibe_scan_limit=2000,
        ),
        search=SearchConfig(default_limit=20, vibe_limit=5),
        vision=VisionConfig(api_token="test-token", match_threshold=0.7),
        locker=LockerConfig(storage_path=str(temp_data_dir / "locker.json")),
        log_level="DEBUG"
    )


@pytest.fixture
def temp_data_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test artifacts."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def black_orchid() -> Fragrance:
    """Dark, sweet oriental used by the vibe scenarios."""
    return Fragrance(
        name="Black Orchid",
        brand="Tom Ford",
        year=2006,
        country="United States",
        base=("patchouli", "vanilla"),
        accords={"oriental": 80},
        rating=3.9,
        rating_count=12000,
        price=150.0,
        image="https://img.example.com/black-orchid.jpg",
        description="A luxurious and sensual fragrance of rich, dark accords",
        oil_type="EDP",
    )


@pytest.fixture
def sample_fragrances(black_orchid) -> List[Fragrance]:
    """Small dataset in a fixed order."""
    return [
        black_orchid,
        Fragrance(
            name="Light Blue",
            brand="Dolce & Gabbana",
            year=2001,
            country="Italy",
            top=("Sicilian Lemon", "Apple", "Cedar"),
            middle=("Bamboo", "Jasmine", "White Rose"),
            base=("Cedar", "Musk", "Amber"),
            accords={"citrus": 100, "fresh": 80, "woody": 60},
            rating=4.0,
            rating_count=15000,
            price=90.0,
            image="https://img.example.com/light-blue.jpg",
            oil_type="EDT",
        ),
        Fragrance(
            name="Sauvage",
            brand="Dior",
            year=2015,
            country="France",
            top=("Bergamot", "Pepper"),
            middle=("Lavender", "Pink Pepper", "Vetiver", "Patchouli"),
            base=("Ambroxan", "Cedar", "Labdanum"),
            accords={"fresh spicy": 100, "amber": 80, "citrus": 60, "woody": 20},
            rating=4.1,
            rating_count=20000,
            price=110.0,
            image="https://img.example.com/sauvage.jpg",
            oil_type="EDT",
        ),
        Fragrance(
            name="Orchid Soleil",
            brand="Tom Ford",
            year=2016,
            country="United States",
            top=("Pink Pepper", "Orange"),
            middle=("Tuberose", "Lily", "Orchid"),
            base=("Vanilla", "Praline"),
            accords={"floral": 100, "sweet": 70, "white floral": 60},
            rating=3.8,
            rating_count=3000,
            price=None,
            oil_type="EDP",
        ),
        Fragrance(
            name="Flowerbomb",
            brand="Viktor&Rolf",
            year=2005,
            country="Netherlands",
            top=("Tea", "Bergamot"),
            middle=("Orchid", "Jasmine", "Freesia", "Rose"),
            base=("Patchouli", "Musk"),
            accords={"floral": 100, "sweet": 80, "powdery": 60},
            rating=3.9,
            price=130.0,
            image="https://img.example.com/flowerbomb.jpg",
            oil_type="EDP",
        ),
        Fragrance(
            name="Aventus",
            brand="Creed",
            year=2010,
            country="France",
            top=("Pineapple", "Bergamot", "Black Currant", "Apple"),
            middle=("Birch", "Patchouli", "Jasmine"),
            base=("Musk", "Oakmoss", "Ambergris", "Vanilla"),
            accords={"fruity": 100, "woody": 80, "smoky": 60},
            rating=4.3,
            rating_count=18000,
            price=435.0,
            image="https://img.example.com/aventus.jpg",
            oil_type="Eau de Parfum",
        ),
    ]


@pytest.fixture
def catalog(sample_fragrances) -> FragranceCatalog:
    """Catalog already loaded with the sample dataset."""
    return FragranceCatalog.from_fragrances(sample_fragrances)


@pytest.fixture
def locker(temp_data_dir) -> Locker:
    """Empty locker persisted under the temp directory."""
    return Locker(JsonLockerRepository(temp_data_dir / "locker.json"))


@pytest.fixture
def sample_image() -> Image.Image:
    """Create a sample RGB image for testing."""
    return Image.new("RGB", (224, 224), color=(120, 40, 160))


@pytest.fixture
def sample_image_bytes(sample_image) -> bytes:
    """PNG-encoded sample image."""
    buffer = io.BytesIO()
    sample_image.save(buffer, format="PNG")
    return buffer.getvalue()


class FakeEmbeddingProvider(EmbeddingProvider):
    """In-process provider returning canned vectors.

    ``by_url`` maps candidate URLs to vectors; URLs missing from it fail
    like an unreachable image.
    """

    def __init__(self, query: List[float], by_url: Dict[str, List[float]]):
        self.query = query
        self.by_url = by_url
        self.image_calls = 0
        self.url_calls: List[str] = []
        self.error: Optional[Exception] = None

    async def embed_image(self, image: bytes) -> List[float]:
        self.image_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.query)

    async def embed_url(self, image_url: str) -> List[float]:
        self.url_calls.append(image_url)
        if image_url not in self.by_url:
            raise ImageDownloadError("Failed to fetch image: 404", image_url=image_url)
        return list(self.by_url[image_url])


@pytest.fixture
def fake_provider_factory():
    """Build FakeEmbeddingProvider instances."""
    return FakeEmbeddingProvider


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the cached configuration between tests."""
    reset_config()
    yield
    reset_config()
