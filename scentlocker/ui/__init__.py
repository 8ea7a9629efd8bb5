"""Streamlit front end for ScentLocker."""
