"""Custom CSS styling for the ScentLocker UI."""


def get_custom_css() -> str:
    """Generate custom CSS for the ScentLocker UI.

    Returns:
        CSS string to inject via st.markdown
    """
    return """
    <style>
    /* Main app styling */
    .main {
        padding: 1rem;
    }

    /* Similarity badge on vibe results */
    .score-badge {
        display: inline-block;
        padding: 0.25rem 0.5rem;
        border-radius: 12px;
        font-weight: 600;
        font-size: 0.9rem;
        margin: 0.2rem;
    }

    /* Active filter counter */
    .filter-count {
        display: inline-block;
        min-width: 1.5rem;
        padding: 0 0.4rem;
        border-radius: 10px;
        background-color: #6A1B9A;
        color: white;
        font-size: 0.8rem;
        text-align: center;
    }

    /* Visual match banner */
    .match-banner {
        background: linear-gradient(135deg, #8E24AA 0%, #3949AB 100%);
        border-radius: 12px;
        padding: 1.5rem;
        color: white;
        margin-bottom: 1.5rem;
    }

    /* Empty state */
    .empty-state {
        text-align: center;
        padding: 3rem;
        color: #666;
    }

    .empty-state-icon {
        font-size: 4rem;
        margin-bottom: 1rem;
    }

    /* Link styling */
    a {
        color: #6A1B9A;
        text-decoration: none;
        font-weight: 500;
    }

    a:hover {
        text-decoration: underline;
    }
    </style>
    """
