"""Validation of captured and uploaded bottle photos before embedding."""

import io
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from scentlocker.utils.exceptions import InvalidImageError
from scentlocker.utils.logger import get_logger

logger = get_logger(__name__)

MAX_FILE_SIZE_MB = 10
MIN_DIMENSION = 50
MAX_DIMENSION = 5000
SUPPORTED_FORMATS = ("JPEG", "PNG", "WEBP")


def validate_image_bytes(data: bytes, source: str = "<upload>") -> str:
    """Validate raw image bytes.

    Args:
        data: Encoded image content
        source: Label used in error context (file name or "camera")

    Returns:
        The detected image format (e.g. "JPEG")

    Raises:
        InvalidImageError: If the image is empty, too large, corrupted,
            outside the dimension bounds or in an unsupported format
    """
    if not data:
        raise InvalidImageError("Image is empty", path=source, reason="empty")

    size_mb = len(data) / (1024 * 1024)
    if size_mb > MAX_FILE_SIZE_MB:
        raise InvalidImageError(
            f"Image too large: {size_mb:.1f}MB (max {MAX_FILE_SIZE_MB}MB)",
            path=source,
            reason="file_size",
        )

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
        # verify() leaves the image unusable, reopen for metadata
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            image_format = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError(
            f"Corrupted or invalid image: {e}", path=source, reason="decode"
        ) from e

    if width < MIN_DIMENSION or height < MIN_DIMENSION:
        raise InvalidImageError(
            f"Image too small: {width}x{height} (min {MIN_DIMENSION}x{MIN_DIMENSION})",
            path=source,
            reason="dimensions",
        )
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise InvalidImageError(
            f"Image too large: {width}x{height} (max {MAX_DIMENSION}x{MAX_DIMENSION})",
            path=source,
            reason="dimensions",
        )
    if image_format not in SUPPORTED_FORMATS:
        raise InvalidImageError(
            f"Unsupported format: {image_format} (supported: {', '.join(SUPPORTED_FORMATS)})",
            path=source,
            reason="format",
        )

    logger.debug(f"Image validation passed: {source} ({width}x{height} {image_format})")
    return image_format


def read_image_file(path: str | Path) -> bytes:
    """Read and validate an image file from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidImageError: If the content fails validation
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image file not found: {path}")

    data = path.read_bytes()
    validate_image_bytes(data, source=path.name)
    return data


def to_jpeg_bytes(data: bytes, quality: int = 90) -> bytes:
    """Re-encode an image as RGB JPEG, the format sent to the embedding API."""
    with Image.open(io.BytesIO(data)) as img:
        if img.mode != "RGB":
            img = img.convert("RGB")
        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
