"""Weekly Analysis page: per-player weekly load against club targets."""

import sys
from pathlib import Path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st
from datetime import datetime
from app.components.sidebar import render_sidebar
from app.components.metrics_cards import display_kpi_row, display_legend
from app.components.charts import (
    plot_team_weekly_distance,
    plot_team_weekly_intensity,
    plot_player_weekly_load,
)
from app.components.weekly_table import render_weekly_table, count_by_class
from utils.load_repository import LoadRepository, StorageError
from utils.weekly_analysis import (
    NoDataError,
    add_missing_week_note,
    load_weekly_report,
    save_week_note,
    update_week_target,
)
from utils.weekly_metrics import PerformanceClass, week_label
from utils.logger import get_logger, log_exception

logger = get_logger(__name__)

# Page config
st.set_page_config(
    page_title="Weekly Analysis - Squad Load Analytics",
    page_icon="📅",
    layout="wide"
)

# Render sidebar
render_sidebar()


def main():
    """Main weekly analysis page."""
    st.title("📅 Weekly Analysis")

    try:
        repository = LoadRepository()
        with st.spinner("Loading weekly analysis..."):
            report = load_weekly_report(repository)
    except NoDataError as e:
        st.warning(f"⚠️ {e}")
        st.page_link("pages/2_Upload_Data.py", label="Upload data", icon="📤")
        st.stop()
    except StorageError as e:
        log_exception(logger, e, "Loading weekly report")
        st.error(f"### Error Loading Data\n\n{e}")
        if st.button("🔄 Retry"):
            st.rerun()
        st.stop()

    render_overview(report)
    st.markdown("---")

    st.markdown("### Player Weekly Performance")
    display_legend()
    render_weekly_table(report)
    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        render_target_editor(repository, report)
    with col2:
        render_note_editor(repository, report)
    st.markdown("---")

    render_charts(report)
    st.markdown("---")

    render_export(report)


def render_overview(report):
    """Render KPIs for the latest week."""
    latest_week = report.weeks[-1]
    average = report.team_averages[latest_week]
    counts = count_by_class(report, latest_week)

    st.markdown(f"### Latest week: {week_label(latest_week)}")
    display_kpi_row([
        {"label": "Players", "value": len(report.players)},
        {"label": "Weeks", "value": len(report.weeks)},
        {"label": "Squad avg distance", "value": f"{average.distance:,.0f} m"},
        {"label": "Squad avg intensity", "value": f"{average.intensity * 100:.0f}%"},
        {
            "label": "On target",
            "value": counts[PerformanceClass.EXCELLENT],
            "help": "Players at or above the distance target this week"
        },
    ])


def render_target_editor(repository, report):
    """Edit the distance/intensity targets of one week."""
    st.markdown("#### 🎯 Edit Weekly Target")

    week = st.selectbox(
        "Week",
        list(reversed(report.weeks)),
        format_func=week_label,
        key="target_week"
    )
    current = report.target(week)

    with st.form("target_form"):
        # Distance is edited in meters and stored in km
        target_m = st.number_input(
            "Target distance (m)",
            min_value=0,
            value=int(round(current.distance_m)),
            step=500
        )
        target_intensity = st.number_input(
            "Target intensity (%)",
            min_value=0,
            value=int(round(current.intensity_pct)),
            step=5
        )
        submitted = st.form_submit_button("💾 Save target")

    if submitted:
        try:
            updated = update_week_target(repository, week, target_m / 1000, target_intensity)
            st.success(f"✅ Target saved on {updated} records")
            st.rerun()
        except StorageError as e:
            log_exception(logger, e, "Updating week targets")
            st.error(f"Error updating targets: {e}")


def render_note_editor(repository, report):
    """Add or edit a player's note for a week."""
    st.markdown("#### 📝 Week Notes")

    player_name = st.selectbox("Player", report.players, key="note_player")
    week = st.selectbox(
        "Week",
        list(reversed(report.weeks)),
        format_func=week_label,
        key="note_week"
    )
    bucket = report.cell(player_name, week)

    if bucket is None:
        st.caption("No data for this week, the note will be stored on its own.")

    with st.form("note_form"):
        notes = st.text_area(
            "Notes",
            value=bucket.notes if bucket else "",
            placeholder="Add notes...",
            height=80
        )
        submitted = st.form_submit_button("💾 Save note")

    if submitted:
        try:
            if bucket is None:
                add_missing_week_note(repository, player_name, week, notes, report.target(week))
            else:
                save_week_note(repository, player_name, week, notes)
            st.success("✅ Note saved")
            st.rerun()
        except StorageError as e:
            log_exception(logger, e, "Saving week note")
            st.error("Failed to save note")


def render_charts(report):
    """Render squad and player trend charts."""
    st.markdown("### 📈 Trends")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(plot_team_weekly_distance(report), use_container_width=True)
    with col2:
        st.plotly_chart(plot_team_weekly_intensity(report), use_container_width=True)

    selected = st.multiselect(
        "Compare players",
        report.players,
        default=report.players[:3]
    )
    metric = st.radio(
        "Metric",
        ["total_distance", "intensity_score"],
        format_func=lambda m: "Distance" if m == "total_distance" else "Intensity",
        horizontal=True
    )

    if selected:
        st.plotly_chart(plot_player_weekly_load(report, selected, metric), use_container_width=True)
    else:
        st.info("Select at least one player")


def render_export(report):
    """CSV export of the weekly table."""
    df = report.to_dataframe()

    col1, col2, col3 = st.columns([1, 1, 1])
    with col2:
        csv = df.to_csv(index=False).encode("utf-8")
        st.download_button(
            label="📥 Export CSV",
            data=csv,
            file_name=f"weekly_analysis_{datetime.now().strftime('%Y%m%d')}.csv",
            mime="text/csv",
            use_container_width=True
        )


if __name__ == "__main__":
    main()
