"""Reusable UI components for Streamlit app."""

from app.components.sidebar import render_sidebar
from app.components.metrics_cards import (
    display_kpi_row,
    display_legend,
    performance_badge_html,
)
from app.components.charts import (
    plot_team_weekly_distance,
    plot_team_weekly_intensity,
    plot_player_weekly_load,
)

__all__ = [
    "render_sidebar",
    "display_kpi_row",
    "display_legend",
    "performance_badge_html",
    "plot_team_weekly_distance",
    "plot_team_weekly_intensity",
    "plot_player_weekly_load",
]
