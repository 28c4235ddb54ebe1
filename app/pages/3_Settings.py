"""Settings page: configuration overview and database maintenance."""

import sys
from pathlib import Path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st
from app.components.sidebar import render_sidebar
from config.settings import settings
from utils.load_repository import LoadRepository, StorageError
from utils.weekly_metrics import IntensityScales
from utils.logger import get_logger, log_exception

logger = get_logger(__name__)

# Page config
st.set_page_config(
    page_title="Settings - Squad Load Analytics",
    page_icon="⚙️",
    layout="wide"
)

# Render sidebar
render_sidebar()


def main():
    """Main settings page logic."""
    st.title("⚙️ Settings")

    tab1, tab2 = st.tabs([
        "🎚️ Intensity Model",
        "📊 Database",
    ])

    with tab1:
        render_intensity_model()

    with tab2:
        render_database_stats()


def render_intensity_model():
    """Show how virtual intensity is computed."""
    st.markdown("### 🎚️ Virtual Intensity")

    scales = IntensityScales.from_settings()

    st.markdown(
        "Weekly intensity is the mean of three normalized terms, each the weekly "
        "sum of a metric divided by its scale:"
    )

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Accelerations scale", f"{scales.acceleration:g}", help="VIR_ACCELERATION_SCALE")
    with col2:
        st.metric("Decelerations scale", f"{scales.deceleration:g}", help="VIR_DECELERATION_SCALE")
    with col3:
        st.metric("HSR distance scale (m)", f"{scales.high_speed_running:g}", help="VIR_HSR_SCALE")

    st.latex(
        r"\text{intensity} = \frac{1}{3}\left(\frac{\Sigma acc}{%g} + \frac{\Sigma dec}{%g} + \frac{\Sigma hsr}{%g}\right)"
        % (scales.acceleration, scales.deceleration, scales.high_speed_running)
    )

    st.caption("Scales are set through environment variables (see .env).")

    st.markdown("---")
    st.markdown("### 🎯 Grades")
    st.markdown(
        "- **Excellent**: 100% of target or more\n"
        "- **Below**: 20% to 99% of target\n"
        "- **Critical**: under 20% of target\n"
        "- **None**: no target set for the week"
    )


def render_database_stats():
    """Render database statistics and maintenance actions."""
    st.markdown("### 📊 Database")

    try:
        repository = LoadRepository()
        record_count = repository.count()
        player_count = repository.count_players()
        first_date, last_date = repository.date_range()
    except StorageError as e:
        log_exception(logger, e, "Fetching database stats")
        st.error("Error loading statistics")
        return

    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Records", f"{record_count:,}")

    with col2:
        st.metric("Players", f"{player_count:,}")

    with col3:
        if first_date and last_date:
            st.metric("Period", f"{first_date:%d/%m/%Y} - {last_date:%d/%m/%Y}")
        else:
            st.metric("Period", "-")

    backend = settings.DATABASE_URL.split(":", 1)[0]
    st.info(f"🗄️ Database backend: **{backend}**")

    st.markdown("---")

    with st.expander("🗑️ Delete all data"):
        st.warning("This removes every uploaded record, target and note.")
        confirm = st.text_input("Type DELETE to confirm")
        if st.button("Delete all records", type="primary", disabled=confirm != "DELETE"):
            try:
                deleted = repository.delete_all()
                st.success(f"✅ {deleted} records deleted")
                st.rerun()
            except StorageError as e:
                log_exception(logger, e, "Deleting records")
                st.error(f"❌ {e}")


if __name__ == "__main__":
    main()
