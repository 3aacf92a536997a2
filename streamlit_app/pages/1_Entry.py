"""Entry page - single readings and averaged reading sessions."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from bp_log.averaging import Average  # noqa: E402
from bp_log.categories import classify  # noqa: E402
from bp_log.errors import StoreWriteError, ValidationError  # noqa: E402
from bp_log.labels import LabelProvider  # noqa: E402
from bp_log.sessions import (  # noqa: E402
    MAX_SESSION_READINGS,
    SessionMeta,
    preview_average,
)
from streamlit_app.components import (  # noqa: E402
    ICONS,
    get_app,
    get_bp_category_icon,
    load_fontawesome,
    show_version_footer,
)


def reading_inputs(labels: LabelProvider, key: str) -> dict:
    """Systolic/diastolic/pulse inputs in one row."""
    col1, col2, col3 = st.columns(3)
    return {
        "systolic": col1.number_input(
            labels.t("entry.systolic"), min_value=0, max_value=300, value=None, key=f"{key}_sys"
        ),
        "diastolic": col2.number_input(
            labels.t("entry.diastolic"), min_value=0, max_value=200, value=None, key=f"{key}_dia"
        ),
        "pulse": col3.number_input(
            labels.t("entry.pulse"), min_value=0, max_value=250, value=None, key=f"{key}_pul"
        ),
    }


def reading_time(labels: LabelProvider, now: datetime, key: str) -> datetime:
    col1, col2 = st.columns(2)
    day = col1.date_input(labels.t("entry.reading_time"), value=now.date(), key=f"{key}_date")
    at = col2.time_input(" ", value=now.time().replace(second=0, microsecond=0), key=f"{key}_time")
    return datetime.combine(day, at)


def show_average(avg: Average, labels: LabelProvider) -> None:
    category = classify(avg.systolic, avg.diastolic)
    st.markdown(
        f"**{labels.t('session.average')}:** {avg.systolic}/{avg.diastolic} mmHg, "
        f"{avg.pulse} bpm &nbsp; {get_bp_category_icon(category)} "
        f"{labels.category_label(category)} &nbsp; "
        f"({avg.count} {labels.t('session.reading_count')})",
        unsafe_allow_html=True,
    )


def single_entry(labels: LabelProvider) -> None:
    app = get_app()
    taken_at = reading_time(labels, app.clock.now(), "single")
    raw = reading_inputs(labels, "single")

    if st.button(labels.t("entry.save"), icon=":material/save:", type="primary"):
        try:
            app.aggregator.save_reading(raw, taken_at=taken_at)
        except ValidationError:
            st.error(labels.t("entry.validation_error"))
            return
        except StoreWriteError:
            st.error(labels.t("entry.save_error"))
            return
        st.success(labels.t("entry.save_success"))


def session_entry(labels: LabelProvider) -> None:
    app = get_app()
    if "session_rows" not in st.session_state:
        st.session_state.session_rows = 1

    session_at = reading_time(labels, app.clock.now(), "session")

    readings = []
    for i in range(st.session_state.session_rows):
        st.markdown(f"**{labels.t('session.reading')} {i + 1}**")
        readings.append(reading_inputs(labels, f"row{i}"))

    col1, col2 = st.columns(2)
    if col1.button(
        labels.t("session.add_reading"),
        icon=":material/add:",
        disabled=st.session_state.session_rows >= MAX_SESSION_READINGS,
    ):
        st.session_state.session_rows += 1
        st.rerun()
    if col2.button(
        labels.t("session.remove_reading"),
        icon=":material/remove:",
        disabled=st.session_state.session_rows <= 1,
    ):
        st.session_state.session_rows -= 1
        st.rerun()

    # Live preview over the readings a save would keep
    computed, dropped = preview_average(readings)
    if dropped:
        st.warning(labels.t("session.out_of_range", n=dropped))
    override = None
    if computed is not None:
        st.markdown("---")
        show_average(computed, labels)
        if st.checkbox(labels.t("session.override")):
            c1, c2, c3 = st.columns(3)
            override = Average(
                systolic=c1.number_input(
                    labels.t("logs.sys"), value=computed.systolic, key="ovr_sys"
                ),
                diastolic=c2.number_input(
                    labels.t("logs.dia"), value=computed.diastolic, key="ovr_dia"
                ),
                pulse=c3.number_input(
                    labels.t("logs.pulse"), value=computed.pulse, key="ovr_pul"
                ),
            )

    if st.button(labels.t("entry.save"), icon=":material/save:", type="primary"):
        meta = SessionMeta(timestamp=session_at, override=override)
        try:
            session = app.aggregator.save_session(meta, readings)
        except ValidationError:
            st.error(labels.t("entry.validation_error"))
            return
        except StoreWriteError:
            st.error(labels.t("entry.save_error"))
            return
        st.session_state.session_rows = 1
        st.success(
            f"{labels.t('entry.save_success')} "
            f"{session.avg_systolic}/{session.avg_diastolic} ({session.reading_count})"
        )


def main() -> None:
    """Entry page."""
    load_fontawesome()
    app = get_app()
    labels = app.labels

    with st.sidebar:
        st.markdown("---")
        show_version_footer()

    st.markdown(f"# {ICONS['heart']} {labels.t('entry.title')}", unsafe_allow_html=True)

    mode = st.segmented_control(
        labels.t("entry.mode"),
        options=["session", "single"],
        format_func=lambda m: labels.t(f"session.{m}_mode"),
        default="session",
        label_visibility="collapsed",
    )

    if mode == "single":
        single_entry(labels)
    else:
        session_entry(labels)


if __name__ == "__main__":
    main()
