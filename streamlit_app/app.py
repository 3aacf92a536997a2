"""BP Log - Streamlit Web UI.

Main application entry point using st.navigation. When ``ui.pin`` is set in
the config, pages stay hidden until the PIN is entered.

Usage:
    streamlit run streamlit_app/app.py
"""

from __future__ import annotations

import hmac
import sys
from pathlib import Path

import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from streamlit_app.components import ICONS, get_app, load_fontawesome  # noqa: E402


def login() -> None:
    """PIN entry page."""
    load_fontawesome()
    app = get_app()
    labels = app.labels

    st.markdown(f"# {ICONS['lock']} {labels.t('login.title')}", unsafe_allow_html=True)

    with st.form("pin_form"):
        pin = st.text_input(labels.t("login.pin"), type="password")
        submitted = st.form_submit_button(labels.t("login.submit"))

    if submitted:
        expected = str(app.config["ui"]["pin"])
        if hmac.compare_digest(pin.strip(), expected):
            st.session_state.authenticated = True
            st.rerun()
        else:
            st.error(labels.t("login.wrong_pin"))


app = get_app()
pin_required = bool(app.config.get("ui", {}).get("pin"))

if pin_required and not st.session_state.get("authenticated"):
    pg = st.navigation([st.Page(login, title="Login", icon=":material/lock:")])
else:
    logs = st.Page(
        "pages/0_Logs.py",
        title=app.labels.t("nav.logs"),
        icon=":material/history:",
        default=True,
    )
    entry = st.Page(
        "pages/1_Entry.py",
        title=app.labels.t("nav.entry"),
        icon=":material/add_circle:",
    )
    pg = st.navigation([logs, entry])

# Page config
st.set_page_config(
    page_title=app.labels.t("app_title"),
    page_icon="❤",
    layout="wide",
)

# Run selected page
pg.run()
