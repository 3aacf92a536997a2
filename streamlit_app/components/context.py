"""Per-session application context for the Streamlit pages."""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from bp_log.main import BPLogApp, load_config  # noqa: E402

CONFIG_PATH = project_root / "config" / "config.yaml"


def get_app() -> BPLogApp:
    """Get or create the app context (store, clock, labels)."""
    if "app" not in st.session_state:
        config = load_config(str(CONFIG_PATH))
        db_path = Path(config["storage"]["database_path"])
        if not db_path.is_absolute():
            config["storage"]["database_path"] = str(project_root / db_path)
        st.session_state.app = BPLogApp(config)
    app: BPLogApp = st.session_state.app
    return app
