"""Sidebar component with squad data stats."""

import streamlit as st
from utils.load_repository import LoadRepository, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)


def render_sidebar():
    """Render sidebar with data stats and controls."""
    with st.sidebar:
        st.title("⚽ Squad Load Analytics")
        st.divider()
        _render_quick_stats()
        st.divider()
        _render_refresh_button()


def _render_quick_stats():
    """Display quick statistics about stored load data."""
    st.markdown("### 📊 Data")

    try:
        repository = LoadRepository()
        total_records = repository.count()
        total_players = repository.count_players()
        first_date, last_date = repository.date_range()

        st.metric("Records", f"{total_records:,}")
        st.metric("Players", f"{total_players}")

        if first_date and last_date:
            st.caption(f"📅 {first_date:%d/%m/%Y} - {last_date:%d/%m/%Y}")
        else:
            st.warning("⚠️ No data uploaded yet")

    except StorageError as e:
        logger.error(f"Error fetching quick stats: {e}")
        st.error("Error loading statistics")


def _render_refresh_button():
    """Rerun the page so the report is recomputed from the database."""
    if st.button("🔄 Refresh data", use_container_width=True):
        st.rerun()
