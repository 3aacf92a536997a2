"""Font Awesome icons helper for Streamlit."""

from __future__ import annotations

import streamlit as st

from bp_log.categories import Category

# Font Awesome CSS - load once per page
FA_CSS = """
<link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.1/css/all.min.css">
<style>
.fa-icon { font-size: 1em; }
.fa-icon-success { color: #28a745; }
.fa-icon-danger { color: #dc3545; }
.fa-icon-warning { color: #ffc107; }
.fa-icon-caution { color: #fd7e14; }
.fa-icon-info { color: #17a2b8; }
.fa-icon-muted { color: #6c757d; }
</style>
"""


def load_fontawesome() -> None:
    """Load Font Awesome CSS. Call once per page."""
    st.markdown(FA_CSS, unsafe_allow_html=True)


def icon(name: str, color: str = "") -> str:
    """Generate Font Awesome icon HTML.

    Args:
        name: Icon name without 'fa-' prefix (e.g., 'check', 'heart-pulse')
        color: Color class: success, danger, warning, caution, info, muted

    Returns:
        HTML string for the icon
    """
    classes = ["fa-solid", f"fa-{name}", "fa-icon"]
    if color:
        classes.append(f"fa-icon-{color}")
    return f'<i class="{" ".join(classes)}"></i>'


ICONS = {
    "heart": icon("heart-pulse", "danger"),
    "chart": icon("chart-line", "warning"),
    "table": icon("table", "warning"),
    "lock": icon("lock", "success"),
    "fire": icon("fire", "caution"),
    "clock": icon("clock", "muted"),
    "trend_same": icon("minus", "muted"),
    "trend_better": icon("arrow-trend-down", "success"),
    "trend_worse": icon("arrow-trend-up", "danger"),
}

CATEGORY_ICONS = {
    Category.NORMAL: icon("circle", "success"),
    Category.ELEVATED: icon("circle", "warning"),
    Category.STAGE1: icon("circle-exclamation", "caution"),
    Category.STAGE2: icon("circle-exclamation", "danger"),
    Category.CRISIS: icon("circle-radiation", "danger"),
}

# Plotly colors per category
CATEGORY_COLORS = {
    Category.NORMAL: "#22c55e",
    Category.ELEVATED: "#eab308",
    Category.STAGE1: "#f97316",
    Category.STAGE2: "#ef4444",
    Category.CRISIS: "#b91c1c",
}


def get_bp_category_icon(category: Category | None) -> str:
    """Get icon for blood pressure category."""
    if category is None:
        return icon("circle-question", "muted")
    return CATEGORY_ICONS[category]
