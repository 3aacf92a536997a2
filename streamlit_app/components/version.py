"""Version helper for Streamlit UI."""

from __future__ import annotations

import streamlit as st

from bp_log import __version__


def get_version_badge() -> str:
    """Get app name and version as HTML."""
    badge_style = (
        "background-color: #6c757d; "
        "color: #fff; "
        "padding: 2px 6px; "
        "border-radius: 4px; "
        "font-size: 0.75em; "
        "font-weight: bold; "
        "margin-left: 8px;"
    )
    return f'BP Log <span style="{badge_style}">v{__version__}</span>'


def show_version_footer() -> None:
    """Display version footer in Streamlit sidebar."""
    st.caption(get_version_badge(), unsafe_allow_html=True)
