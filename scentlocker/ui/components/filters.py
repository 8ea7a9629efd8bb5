"""Filter sidebar component."""

from typing import List

import streamlit as st

from scentlocker.core.search.filters import (
    MAX_PRICE,
    FragranceFilters,
    PriceRange,
    YearRange,
)


def render_filters(
    current: FragranceFilters,
    brands: List[str],
    accords: List[str],
    countries: List[str],
) -> FragranceFilters:
    """Render filter controls in sidebar.

    Args:
        current: Filters persisted from the previous run
        brands: Brand options from the catalog
        accords: Accord options from the catalog
        countries: Brand origin options from the catalog

    Returns:
        FragranceFilters with the user selections
    """
    st.sidebar.markdown("### 🔍 Filters")

    # Price range
    st.sidebar.markdown("#### Price Range")
    price = st.sidebar.slider(
        "Select price range",
        min_value=0.0,
        max_value=MAX_PRICE,
        value=(current.price_range.min, current.price_range.max),
        step=10.0,
        help="Fragrances without a price always pass"
    )

    # Rating and reviews
    st.sidebar.markdown("#### Rating")
    min_rating = st.sidebar.slider(
        "Minimum rating",
        min_value=0.0,
        max_value=5.0,
        value=current.min_rating,
        step=0.5,
    )
    min_reviews = st.sidebar.number_input(
        "Minimum review count",
        min_value=0,
        value=current.min_review_count or 0,
        step=50,
    )

    # Character
    st.sidebar.markdown("#### Character")
    selected_accords = st.sidebar.multiselect(
        "Accords",
        options=accords,
        default=[a for a in current.accords if a in accords],
    )
    wear_context = st.sidebar.multiselect(
        "Wear context",
        options=["day", "night", "office", "date"],
        default=current.wear_context,
        format_func=str.capitalize,
    )
    concentration = st.sidebar.multiselect(
        "Concentration",
        options=["EDT", "EDP", "Parfum"],
        default=current.concentration,
    )

    # Notes
    st.sidebar.markdown("#### Notes")
    notes_include = st.sidebar.text_input(
        "Must include (comma-separated)",
        value=", ".join(current.notes_include),
    )
    notes_exclude = st.sidebar.text_input(
        "Must not include (comma-separated)",
        value=", ".join(current.notes_exclude),
    )

    # House
    st.sidebar.markdown("#### House")
    selected_brands = st.sidebar.multiselect(
        "Brands",
        options=brands,
        default=[b for b in current.brands if b in brands],
    )
    brand_origin = st.sidebar.multiselect(
        "Brand origin",
        options=countries,
        default=[c for c in current.brand_origin if c in countries],
    )
    house_type = st.sidebar.multiselect(
        "House type",
        options=["Designer", "Niche", "Indie"],
        default=current.house_type,
        help="Not applied yet: the dataset has no house type information",
    )

    # Release year
    defaults = YearRange()
    years = st.sidebar.slider(
        "Release year",
        min_value=1900,
        max_value=defaults.max,
        value=(max(current.year_range.min, 1900), current.year_range.max),
    )
    year_min = years[0] if years[0] > 1900 else defaults.min

    return FragranceFilters(
        price_range=PriceRange(min=price[0], max=price[1]),
        brands=selected_brands,
        accords=selected_accords,
        wear_context=wear_context,
        min_rating=min_rating,
        concentration=concentration,
        notes_include=split_notes(notes_include),
        notes_exclude=split_notes(notes_exclude),
        house_type=house_type,
        brand_origin=brand_origin,
        year_range=YearRange(min=year_min, max=years[1]),
        min_review_count=int(min_reviews) or None,
    )


def split_notes(text: str) -> List[str]:
    """Comma-separated input to a list of trimmed, non-empty notes."""
    return [part.strip() for part in text.split(",") if part.strip()]
