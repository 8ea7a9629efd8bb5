"""
Static vibe taxonomy.

Maps every vibe category to representative notes and accords, and maps
conversational context phrases (seasons, occasions, intensity words) to
the vibes they imply. Both tables are read-only module data.
"""

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from scentlocker.domain.entities.vibe import VibeMapping, VibeType

V = VibeType

VIBE_TAXONOMY: Mapping[VibeType, VibeMapping] = MappingProxyType({
    V.FRESH: VibeMapping(
        notes=(
            "bergamot", "lemon", "lime", "grapefruit", "orange", "mandarin", "neroli",
            "mint", "peppermint", "spearmint", "eucalyptus", "green tea", "cucumber",
            "watermelon", "apple", "pear", "aloe", "bamboo",
        ),
        accords=("fresh", "citrus", "green", "aquatic"),
    ),
    V.CLEAN: VibeMapping(
        notes=(
            "soap", "cotton", "linen", "white musk", "aldehydes", "lily of the valley",
            "jasmine", "rose", "lavender", "iris", "violet", "peony", "magnolia",
            "ozone", "water", "rain",
        ),
        accords=("fresh", "floral", "white floral", "aldehydic"),
    ),
    V.SWEET: VibeMapping(
        notes=(
            "vanilla", "caramel", "honey", "sugar", "maple", "chocolate", "cocoa",
            "praline", "almond", "hazelnut", "toffee", "cotton candy", "marshmallow",
            "fruity", "peach", "apricot", "strawberry", "raspberry", "cherry", "plum",
        ),
        accords=("sweet", "gourmand", "fruity", "vanilla"),
    ),
    V.DARK: VibeMapping(
        notes=(
            "patchouli", "oud", "amber", "labdanum", "benzoin", "incense", "myrrh",
            "frankincense", "vetiver", "leather", "tobacco", "coffee", "dark chocolate",
            "black pepper", "cinnamon", "clove", "nutmeg", "cardamom",
        ),
        accords=("dark", "oriental", "woody", "spicy", "amber"),
    ),
    V.WOODY: VibeMapping(
        notes=(
            "cedar", "sandalwood", "pine", "fir", "oak", "birch", "teak", "mahogany",
            "vetiver", "guaiac wood", "palo santo", "agarwood", "oud", "ebony",
        ),
        accords=("woody", "forest", "dry woods"),
    ),
    V.SPICY: VibeMapping(
        notes=(
            "pepper", "black pepper", "pink pepper", "cardamom", "cinnamon", "clove",
            "nutmeg", "ginger", "cumin", "coriander", "saffron", "turmeric", "anise",
            "star anise", "fennel",
        ),
        accords=("spicy", "oriental", "warm spicy"),
    ),
    V.POWDERY: VibeMapping(
        notes=(
            "iris", "orris", "violet", "heliotrope", "mimosa", "almond", "tonka bean",
            "vanilla", "musk", "amber", "sandalwood",
        ),
        accords=("powdery", "soft", "floral"),
    ),
    V.SMOKY: VibeMapping(
        notes=(
            "smoke", "incense", "frankincense", "myrrh", "oud", "leather", "tobacco",
            "birch tar", "guaiac wood", "cade", "labdanum",
        ),
        accords=("smoky", "dark", "woody"),
    ),
    V.FLORAL: VibeMapping(
        notes=(
            "rose", "jasmine", "lily", "lily of the valley", "peony", "magnolia",
            "gardenia", "tuberose", "ylang-ylang", "neroli", "orange blossom",
            "lavender", "violet", "iris", "orchid", "freesia", "hyacinth",
        ),
        accords=("floral", "white floral", "rose", "jasmine"),
    ),
    V.CITRUS: VibeMapping(
        notes=(
            "lemon", "lime", "grapefruit", "orange", "mandarin", "bergamot", "yuzu",
            "kumquat", "tangerine", "clementine", "bitter orange",
        ),
        accords=("citrus", "fresh"),
    ),
    V.AQUATIC: VibeMapping(
        notes=(
            "water", "ozone", "calone", "seaweed", "salt", "marine", "aquatic",
            "rain", "dew", "water lily", "lotus",
        ),
        accords=("aquatic", "fresh", "marine"),
    ),
    V.GREEN: VibeMapping(
        notes=(
            "grass", "green tea", "matcha", "galbanum", "violet leaf", "tomato leaf",
            "basil", "mint", "eucalyptus", "pine", "fir", "bamboo", "cucumber",
        ),
        accords=("green", "fresh", "herbal"),
    ),
    V.WARM: VibeMapping(
        notes=(
            "vanilla", "amber", "tonka bean", "benzoin", "cinnamon", "nutmeg",
            "cardamom", "sandalwood", "cedar", "honey", "caramel", "cocoa",
        ),
        accords=("warm", "amber", "gourmand", "oriental"),
    ),
    V.COOL: VibeMapping(
        notes=(
            "mint", "eucalyptus", "menthol", "camphor", "ice", "water", "ozone",
            "cucumber", "green tea", "aloe",
        ),
        accords=("fresh", "cool", "aquatic"),
    ),
    V.GOURMAND: VibeMapping(
        notes=(
            "vanilla", "caramel", "chocolate", "coffee", "honey", "maple", "praline",
            "almond", "hazelnut", "toffee", "cotton candy", "marshmallow", "cocoa",
        ),
        accords=("gourmand", "sweet", "vanilla"),
    ),
    V.ORIENTAL: VibeMapping(
        notes=(
            "amber", "incense", "oud", "patchouli", "vanilla", "tonka bean",
            "benzoin", "labdanum", "spices", "cinnamon", "clove", "cardamom",
        ),
        accords=("oriental", "amber", "spicy"),
    ),
    # Contextual vibes are weighted down to limit false positives
    V.MASCULINE: VibeMapping(
        notes=(
            "vetiver", "cedar", "leather", "tobacco", "oud", "amber", "patchouli",
            "bergamot", "lavender", "sage", "juniper", "whiskey", "rum",
        ),
        accords=("woody", "spicy", "fresh"),
        weight=0.8,
    ),
    V.FEMININE: VibeMapping(
        notes=(
            "rose", "jasmine", "lily", "peony", "violet", "iris", "vanilla",
            "peach", "apricot", "strawberry", "cherry", "powdery",
        ),
        accords=("floral", "sweet", "powdery"),
        weight=0.8,
    ),
    V.UNISEX: VibeMapping(
        notes=(
            "bergamot", "lavender", "jasmine", "rose", "cedar", "sandalwood",
            "amber", "musk", "vanilla", "vetiver",
        ),
        accords=("fresh", "woody", "floral"),
        weight=0.6,
    ),
})

CONTEXT_MAPPINGS: Mapping[str, Tuple[VibeType, ...]] = MappingProxyType({
    # Season
    "summer": (V.FRESH, V.CITRUS, V.AQUATIC, V.COOL),
    "winter": (V.WARM, V.DARK, V.WOODY, V.SPICY),
    "spring": (V.FLORAL, V.FRESH, V.GREEN),
    "fall": (V.WOODY, V.SPICY, V.WARM, V.ORIENTAL),
    "autumn": (V.WOODY, V.SPICY, V.WARM, V.ORIENTAL),
    # Occasion
    "office": (V.CLEAN, V.FRESH, V.UNISEX),
    "professional": (V.CLEAN, V.FRESH, V.UNISEX),
    "date": (V.SWEET, V.WARM, V.FLORAL, V.GOURMAND),
    "date night": (V.SWEET, V.WARM, V.DARK, V.ORIENTAL),
    "everyday": (V.FRESH, V.CLEAN, V.UNISEX),
    "casual": (V.FRESH, V.CLEAN, V.CITRUS),
    "formal": (V.WOODY, V.SPICY, V.ORIENTAL, V.DARK),
    "evening": (V.DARK, V.WARM, V.ORIENTAL, V.WOODY),
    "night": (V.DARK, V.WARM, V.ORIENTAL, V.WOODY),
    # Intensity
    "light": (V.FRESH, V.CLEAN, V.CITRUS, V.AQUATIC),
    "subtle": (V.CLEAN, V.FRESH, V.POWDERY),
    "strong": (V.DARK, V.WOODY, V.SPICY, V.ORIENTAL),
    "intense": (V.DARK, V.WOODY, V.SPICY, V.SMOKY),
    # Descriptors
    "masculine": (V.MASCULINE, V.WOODY, V.SPICY, V.FRESH),
    "feminine": (V.FEMININE, V.FLORAL, V.SWEET, V.POWDERY),
})

# Contribution of one taxonomy note: (vibe, weight)
NoteContribution = Tuple[VibeType, float]


def build_note_index(
    taxonomy: Mapping[VibeType, VibeMapping] = VIBE_TAXONOMY,
) -> Dict[str, List[NoteContribution]]:
    """
    Invert the taxonomy into a lowercase note -> contributions index.

    A note listed under several vibes (e.g. "oud") contributes to each
    of them with that vibe's weight.
    """
    index: Dict[str, List[NoteContribution]] = {}
    for vibe, mapping in taxonomy.items():
        for note in mapping.notes:
            index.setdefault(note.lower(), []).append((vibe, mapping.weight))
    return index


def vibe_names() -> Tuple[str, ...]:
    """All vibe category names in taxonomy order."""
    return tuple(vibe.value for vibe in VIBE_TAXONOMY)
