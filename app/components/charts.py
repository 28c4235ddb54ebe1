"""Chart components using Plotly."""

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd
from typing import List, Optional
from utils.weekly_analysis import WeeklyReport
from utils.weekly_metrics import week_label


def _short_week(week) -> str:
    return week.strftime("%d %b")


def plot_team_weekly_distance(
    report: WeeklyReport,
    title: str = "Squad Average Distance per Week"
) -> go.Figure:
    """
    Plot the squad's average weekly distance against the weekly target.

    Args:
        report: Weekly report
        title: Chart title

    Returns:
        Plotly figure
    """
    weeks = [_short_week(w) for w in report.weeks]
    averages = [report.team_averages[w].distance for w in report.weeks]
    targets = [report.target(w).distance_m for w in report.weeks]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=weeks,
        y=averages,
        name="Average distance",
        marker_color="#1f77b4",
        text=[f"{d:.0f} m" for d in averages],
        textposition="auto",
        hovertext=[week_label(w) for w in report.weeks]
    ))

    fig.add_trace(go.Scatter(
        x=weeks,
        y=targets,
        name="Target",
        mode="lines+markers",
        line=dict(color="#d62728", width=2, dash="dash")
    ))

    fig.update_layout(
        title=title,
        xaxis_title="Week starting",
        yaxis_title="Distance (m)",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        height=400
    )

    return fig


def plot_team_weekly_intensity(
    report: WeeklyReport,
    title: str = "Squad Average Intensity per Week"
) -> go.Figure:
    """Plot the squad's average virtual intensity (%) against the target."""
    weeks = [_short_week(w) for w in report.weeks]
    averages = [report.team_averages[w].intensity * 100 for w in report.weeks]
    targets = [report.target(w).intensity_pct for w in report.weeks]

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=weeks,
        y=averages,
        name="Average intensity",
        mode="lines+markers",
        line=dict(color="#ff7f0e", width=2),
        fill="tozeroy"
    ))

    fig.add_trace(go.Scatter(
        x=weeks,
        y=targets,
        name="Target",
        mode="lines",
        line=dict(color="#d62728", width=2, dash="dash")
    ))

    fig.update_layout(
        title=title,
        xaxis_title="Week starting",
        yaxis_title="Intensity (%)",
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        height=400
    )

    return fig


def plot_player_weekly_load(
    report: WeeklyReport,
    players: List[str],
    metric: str = "total_distance",
    title: Optional[str] = None
) -> go.Figure:
    """
    Plot one weekly metric for selected players.

    Args:
        report: Weekly report
        players: Player names to include
        metric: Bucket attribute ("total_distance" or "intensity_score")
        title: Chart title

    Returns:
        Plotly figure
    """
    rows = []
    for week in report.weeks:
        for player_name in players:
            bucket = report.cell(player_name, week)
            if bucket is None:
                continue
            value = getattr(bucket, metric)
            if metric == "intensity_score":
                value *= 100
            rows.append({"Week": week, "Player": player_name, "Value": value})

    df = pd.DataFrame(rows, columns=["Week", "Player", "Value"])

    y_label = "Intensity (%)" if metric == "intensity_score" else "Distance (m)"

    fig = px.line(
        df,
        x="Week",
        y="Value",
        color="Player",
        markers=True,
        title=title or f"Weekly {y_label} by Player",
        labels={"Value": y_label, "Week": "Week starting"}
    )

    fig.update_layout(height=400)

    return fig
