"""Player x week performance table rendered as HTML."""

import html
import streamlit as st
from app.components.metrics_cards import performance_badge_html
from utils.weekly_analysis import WeeklyReport, classify_bucket, format_distance, format_intensity
from utils.weekly_metrics import PerformanceClass, week_label

TABLE_CSS = """
<style>
.weekly-table { border-collapse: collapse; font-size: 0.85em; }
.weekly-table th, .weekly-table td { border: 1px solid #e0e0e0; padding: 6px; text-align: center; vertical-align: top; }
.weekly-table th { background-color: #f0f2f6; }
.weekly-table td.player-name { text-align: left; font-weight: 600; white-space: nowrap; }
.weekly-table tr.target-row td, .weekly-table tr.average-row td { background-color: #fafafa; }
.weekly-table .note { color: #666; font-style: italic; font-size: 0.85em; margin-top: 4px; }
.weekly-table .missing { color: #bbb; }
</style>
"""


def _cell(*parts: str) -> str:
    return "<br>".join(part for part in parts if part)


def build_weekly_table_html(report: WeeklyReport) -> str:
    """
    Build the weekly table: a target row, a squad average row and one row
    per player. Distance is graded against the week's km target, intensity
    against its percentage target.
    """
    header = "".join(f"<th>{html.escape(week_label(w))}<br><small>Week {i + 1}</small></th>"
                     for i, w in enumerate(report.weeks))
    rows = [f"<tr><th>Player</th>{header}</tr>"]

    target_cells = []
    for week in report.weeks:
        target = report.target(week)
        target_cells.append(f"<td>{_cell(f'{target.distance_km:g} KM', f'{target.intensity_pct:g}%')}</td>")
    rows.append(f'<tr class="target-row"><td class="player-name">🎯 Target</td>{"".join(target_cells)}</tr>')

    average_cells = []
    for week in report.weeks:
        average = report.team_averages[week]
        if not average.has_data:
            average_cells.append('<td class="missing">-</td>')
            continue
        average_cells.append("<td>{}</td>".format(_cell(
            performance_badge_html(format_distance(average.distance), average.distance_class),
            performance_badge_html(format_intensity(average.intensity), average.intensity_class),
        )))
    rows.append(f'<tr class="average-row"><td class="player-name">📊 Squad average</td>{"".join(average_cells)}</tr>')

    for player_name in report.players:
        cells = []
        for week in report.weeks:
            bucket = report.cell(player_name, week)
            if bucket is None:
                cells.append('<td class="missing">-</td>')
                continue
            distance_class, intensity_class = classify_bucket(bucket, report.target(week))
            note = f'<div class="note">{html.escape(bucket.notes)}</div>' if bucket.notes else ""
            cells.append("<td>{}{}</td>".format(_cell(
                performance_badge_html(format_distance(bucket.total_distance), distance_class),
                performance_badge_html(format_intensity(bucket.intensity_score), intensity_class),
            ), note))
        rows.append(f'<tr><td class="player-name">{html.escape(player_name)}</td>{"".join(cells)}</tr>')

    return f'<div style="overflow-x: auto;"><table class="weekly-table">{"".join(rows)}</table></div>'


def render_weekly_table(report: WeeklyReport):
    """Render the weekly table in Streamlit."""
    st.markdown(TABLE_CSS, unsafe_allow_html=True)
    st.markdown(build_weekly_table_html(report), unsafe_allow_html=True)


def count_by_class(report: WeeklyReport, week) -> dict:
    """Number of players per distance grade in one week."""
    counts = {performance: 0 for performance in PerformanceClass}
    for player_name in report.players:
        bucket = report.cell(player_name, week)
        if bucket is None:
            continue
        distance_class, _ = classify_bucket(bucket, report.target(week))
        counts[distance_class] += 1
    return counts
