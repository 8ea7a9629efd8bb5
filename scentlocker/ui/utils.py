"""Utility functions for the ScentLocker Streamlit UI."""

from typing import List, Optional, Sequence, Tuple

from scentlocker.domain.entities.fragrance import Fragrance
from scentlocker.domain.entities.vibe import VibeScore


def read_upload(uploaded_file) -> bytes:
    """Raw bytes of a Streamlit UploadedFile or camera capture.

    Args:
        uploaded_file: Streamlit UploadedFile object

    Returns:
        Encoded image bytes, validated later by the visual search use case
    """
    return uploaded_file.getvalue()


def format_price(price: Optional[float], currency: str = "$") -> str:
    """Format price with currency symbol.

    Args:
        price: Price value
        currency: Currency symbol (default dollar)

    Returns:
        Formatted price string (e.g., "$95.00")
    """
    if price is None:
        return "N/A"
    return f"{currency}{price:.2f}"


def format_rating(rating: Optional[float], rating_count: Optional[int] = None) -> str:
    """Format rating as "★ 4.12 (1,234)"."""
    if rating is None:
        return "No rating"
    text = f"★ {rating:.2f}"
    if rating_count:
        text += f" ({rating_count:,})"
    return text


def format_average_rating(rating: Optional[float]) -> str:
    """Format a collection average as "4.1/5"."""
    if rating is None:
        return "N/A"
    return f"{rating:.1f}/5"


def format_similarity_score(score: float, as_percentage: bool = True) -> str:
    """Format similarity score with optional percentage.

    Args:
        score: Similarity score (0.0 to 1.0)
        as_percentage: If True, format as percentage

    Returns:
        Formatted score string
    """
    if as_percentage:
        return f"{score * 100:.1f}%"
    else:
        return f"{score:.3f}"


def get_score_color(score: float) -> str:
    """Get color code based on score value.

    Args:
        score: Similarity score (0.0 to 1.0)

    Returns:
        CSS color code
    """
    if score >= 0.8:
        return "#00C853"
    elif score >= 0.6:
        return "#FFD600"
    elif score >= 0.4:
        return "#FF6D00"
    else:
        return "#DD2C00"


def top_accords(fragrance: Fragrance, limit: int = 5) -> List[Tuple[str, float]]:
    """Strongest accords first."""
    return sorted(fragrance.accords.items(), key=lambda kv: kv[1], reverse=True)[:limit]


def format_notes(notes: Sequence[str], max_notes: int = 6) -> str:
    """Comma-joined notes, with "+N more" when truncated."""
    if not notes:
        return "-"
    shown = ", ".join(notes[:max_notes])
    hidden = len(notes) - max_notes
    return f"{shown} +{hidden} more" if hidden > 0 else shown


def format_vibe_scores(scores: Sequence[VibeScore]) -> str:
    """Vibe badges text, e.g. "Dark 100% · Sweet 64%"."""
    return " · ".join(f"{s.vibe.label} {s.score:.0%}" for s in scores)


def truncate_text(text: str, max_length: int = 50) -> str:
    """Truncate text to maximum length with ellipsis.

    Args:
        text: Input text
        max_length: Maximum length

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
