"""Logs page - insights, trend chart and merged reading history."""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from bp_log.chart import RANGES, series_frame, windowed_series  # noqa: E402
from bp_log.insights import Insights, compute_insights  # noqa: E402
from bp_log.labels import LabelProvider  # noqa: E402
from bp_log.models import HistoryEntry  # noqa: E402
from streamlit_app.components import (  # noqa: E402
    CATEGORY_COLORS,
    ICONS,
    get_app,
    get_bp_category_icon,
    load_fontawesome,
    show_version_footer,
)


def show_insights(insights: Insights, labels: LabelProvider) -> None:
    """Insights card: category, trend, streak and time-of-day pattern."""
    st.subheader(labels.t("insights.title"))

    category = insights.display_category
    if category is not None:
        day = "insights.today" if insights.today_category is not None else "insights.yesterday"
        st.markdown(
            f"{get_bp_category_icon(category)} **{labels.t(day)}:** "
            f"{labels.category_label(category)}",
            unsafe_allow_html=True,
        )

    week = insights.week
    if week.count_7d:
        col1, col2, col3 = st.columns(3)
        col1.metric(
            labels.t("logs.sys"), week.systolic, delta=week.delta_systolic, delta_color="inverse"
        )
        col2.metric(
            labels.t("logs.dia"), week.diastolic, delta=week.delta_diastolic, delta_color="inverse"
        )
        col3.metric(labels.t("logs.pulse"), week.pulse)

    phrases = []
    if insights.trend is not None:
        text = labels.t(f"trend.{insights.trend}", delta=abs(insights.trend_delta or 0))
        phrases.append(f"{ICONS['trend_' + insights.trend]} {text}")
    if insights.streak > 0:
        phrases.append(f"{ICONS['fire']} {labels.format_streak(insights.streak)}")
    if insights.time_pattern is not None:
        phrases.append(f"{ICONS['clock']} {labels.t('pattern.' + insights.time_pattern)}")
    if phrases:
        st.markdown(" &nbsp;·&nbsp; ".join(phrases), unsafe_allow_html=True)

    if week.count_7d:
        st.caption(labels.t("insights.based_on", n=week.count_7d))


def show_chart(history: list[HistoryEntry], labels: LabelProvider, now: datetime) -> None:
    """Trend chart with a lookback window selector."""
    st.subheader(labels.t("logs.chart_title"))
    range_key = st.radio(
        labels.t("logs.range"),
        options=list(RANGES),
        format_func=lambda key: labels.t(f"range.{key}"),
        horizontal=True,
        label_visibility="collapsed",
    )

    df = series_frame(windowed_series(history, RANGES[range_key], now))
    if df.empty:
        st.info(labels.t("logs.empty"))
        return

    fig = go.Figure()
    for column, color in (
        ("systolic", "#ef4444"),
        ("diastolic", "#3b82f6"),
        ("pulse", "#10b981"),
    ):
        fig.add_trace(
            go.Scatter(
                x=df["timestamp"],
                y=df[column],
                mode="lines+markers",
                name=column.title(),
                line={"color": color, "width": 2},
                marker={"size": 6},
            )
        )

    # Reference lines
    fig.add_hline(y=130, line_dash="dash", line_color="orange", annotation_text="130")
    fig.add_hline(y=80, line_dash="dot", line_color="orange", annotation_text="80")

    fig.update_layout(
        yaxis_title="mmHg / bpm",
        hovermode="x unified",
        legend={"yanchor": "top", "y": 0.99, "xanchor": "left", "x": 0.01},
        margin={"t": 20},
    )
    st.plotly_chart(fig, width="stretch")


def show_history(history: list[HistoryEntry], labels: LabelProvider) -> None:
    """History table with per-entry delete."""
    st.subheader(labels.t("logs.title"))

    display_data = []
    for entry in history:
        display_data.append(
            {
                "Date": entry.timestamp.strftime("%d %b %Y, %H:%M"),
                labels.t("logs.bp"): f"{entry.systolic}/{entry.diastolic}",
                labels.t("logs.pulse"): entry.pulse,
                "Category": labels.category_label(entry.category),
                labels.t("session.reading_count"): (
                    entry.record.reading_count if entry.is_session else 1
                ),
            }
        )

    colors = {labels.category_label(c): color for c, color in CATEGORY_COLORS.items()}
    df = pd.DataFrame(display_data)
    st.dataframe(
        df.style.map(lambda v: f"color: {colors[v]}" if v in colors else "", subset=["Category"]),
        width="stretch",
        hide_index=True,
    )

    sessions = [e for e in history if e.is_session and e.record.readings]
    if sessions:
        with st.expander(labels.t("session.individual_readings")):
            for entry in sessions:
                values = ", ".join(
                    f"{r.systolic}/{r.diastolic} ({r.pulse})" for r in entry.record.readings
                )
                st.markdown(f"**{entry.timestamp:%d %b %Y, %H:%M}** - {values}")

    with st.expander(labels.t("logs.delete")):
        options = {
            f"{e.timestamp:%d %b %Y, %H:%M} - {e.systolic}/{e.diastolic} ({e.kind})": e
            for e in history
        }
        choice = st.selectbox(labels.t("logs.delete"), options=list(options))
        if st.button(labels.t("logs.delete"), icon=":material/delete:", type="primary"):
            entry = options[choice]
            app = get_app()
            if entry.is_session:
                app.store.delete_session(entry.record.id)
            else:
                app.store.delete_reading(entry.record.id)
            st.rerun()


def main() -> None:
    """Logs page."""
    load_fontawesome()
    app = get_app()
    labels = app.labels

    with st.sidebar:
        st.markdown("---")
        show_version_footer()

    st.markdown(f"# {ICONS['heart']} {labels.t('app_title')}", unsafe_allow_html=True)

    try:
        history = app.history()
    except Exception as e:
        st.error(f"{labels.t('logs.load_error')}: {e}")
        return

    if not history:
        st.warning(labels.t("logs.empty"))
        return

    now = app.clock.now()
    insights = compute_insights(history, now)
    if insights is not None:
        show_insights(insights, labels)
        st.markdown("---")

    show_chart(history, labels, now)
    st.markdown("---")
    show_history(history, labels)


if __name__ == "__main__":
    main()
