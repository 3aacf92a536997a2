"""Streamlit UI components."""

from streamlit_app.components.context import get_app
from streamlit_app.components.icons import (
    CATEGORY_COLORS,
    ICONS,
    get_bp_category_icon,
    load_fontawesome,
)
from streamlit_app.components.version import show_version_footer

__all__ = [
    "CATEGORY_COLORS",
    "ICONS",
    "get_app",
    "get_bp_category_icon",
    "load_fontawesome",
    "show_version_footer",
]
