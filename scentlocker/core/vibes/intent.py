"""
Query intent heuristic: vibe search or name search.
"""

import re
from typing import Iterable, Optional

from scentlocker.core.vibes.taxonomy import CONTEXT_MAPPINGS, vibe_names

DESCRIPTIVE_TERMS = re.compile(
    r"(fresh|sweet|dark|woody|spicy|clean|warm|cool|light|strong|subtle|intense)"
)
MIN_VIBE_WORDS = 3


def is_vibe_query(
    query: str,
    vibes: Optional[Iterable[str]] = None,
    contexts: Optional[Iterable[str]] = None,
) -> bool:
    """
    Guess whether a query describes a mood rather than a product.

    A single word counts only if it is literally a vibe or context key,
    so "rose" or "Chanel" stay name searches. Longer queries count when
    they mention a vibe, a context phrase or a descriptive adjective, or
    run to three words or more.

    This is a UX hint; lexical and vibe search stay callable directly.
    """
    text = query.lower().strip()
    words = text.split()
    if not words:
        return False

    vibe_words = tuple(vibes) if vibes is not None else vibe_names()
    context_words = tuple(contexts) if contexts is not None else tuple(CONTEXT_MAPPINGS)

    if len(words) == 1:
        return text in vibe_words or text in context_words

    return (
        any(vibe in text for vibe in vibe_words)
        or any(context in text for context in context_words)
        or DESCRIPTIVE_TERMS.search(text) is not None
        or len(words) >= MIN_VIBE_WORDS
    )
