"""Metric cards, KPI rows and performance badges."""

import streamlit as st
from typing import Optional, Union
from utils.weekly_metrics import PerformanceClass

# Badge colours per grade (background, text)
PERFORMANCE_COLORS = {
    PerformanceClass.EXCELLENT: ("#d4edda", "#155724"),
    PerformanceClass.BELOW: ("#f8d7da", "#721c24"),
    PerformanceClass.CRITICAL: ("#fff3cd", "#856404"),
    PerformanceClass.NONE: ("#f0f2f6", "#31333f"),
}


def display_metric_card(
    label: str,
    value: Union[str, int, float],
    delta: Optional[Union[str, int, float]] = None,
    delta_color: str = "normal",
    help_text: Optional[str] = None
):
    """Display a metric card with optional delta."""
    st.metric(
        label=label,
        value=value,
        delta=delta,
        delta_color=delta_color,
        help=help_text
    )


def display_kpi_row(metrics: list):
    """
    Display a row of KPI metrics.

    Args:
        metrics: List of metric dictionaries with keys:
                 - label: str
                 - value: str/int/float
                 - delta: Optional[str/int/float]
                 - help: Optional[str]

    Example:
        display_kpi_row([
            {"label": "Players", "value": 24},
            {"label": "Weeks", "value": 12},
            {"label": "Records", "value": "1,204"}
        ])
    """
    cols = st.columns(len(metrics))

    for col, metric in zip(cols, metrics):
        with col:
            display_metric_card(
                label=metric.get("label", ""),
                value=metric.get("value", ""),
                delta=metric.get("delta"),
                delta_color=metric.get("delta_color", "normal"),
                help_text=metric.get("help")
            )


def performance_badge_html(text: str, performance: PerformanceClass) -> str:
    """Inline HTML badge coloured by grade."""
    background, color = PERFORMANCE_COLORS[performance]
    return (
        f'<span style="background-color: {background}; color: {color}; '
        f'padding: 2px 8px; border-radius: 4px; font-weight: 600;">{text}</span>'
    )


def display_legend():
    """Explain the badge colours."""
    st.markdown(
        " ".join([
            performance_badge_html("≥ 100% of target", PerformanceClass.EXCELLENT),
            performance_badge_html("20-99%", PerformanceClass.BELOW),
            performance_badge_html("< 20%", PerformanceClass.CRITICAL),
            performance_badge_html("No target", PerformanceClass.NONE),
        ]),
        unsafe_allow_html=True
    )
